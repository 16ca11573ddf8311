import logging
import sys

from root_boot.cli import get_manager, parse_args, select_device_terminal, usage_text, version_text
from root_boot.config import ConfigError, load_settings
from root_boot.flow import BootFlow
from root_boot.platforms.common import ElevationError, InventoryError, is_admin, relaunch_elevated


log = logging.getLogger(__name__)


def setup_logging(level: int) -> None:
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr)


def _selector(frontend: str):
    if frontend == 'gui':
        from root_boot.gui.app import select_device_gui
        return select_device_gui
    return select_device_terminal


def run(argv=None, admin_check=is_admin, relaunch=relaunch_elevated) -> int:
    argv = sys.argv[1:] if argv is None else argv
    args = parse_args(argv)
    if args is None:
        print(usage_text())
        return 0
    if args.version:
        print(version_text())
        return 0

    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f'Invalid configuration: {exc}')
        return 1
    setup_logging(settings.log_level)

    if not admin_check():
        try:
            return relaunch()
        except ElevationError as exc:
            log.error('%s', exc)
            return 1

    flow = BootFlow(
        get_manager(dry_run=settings.dry_run),
        _selector(settings.frontend),
        reboot_delay=settings.reboot_delay,
    )
    try:
        state = flow.run()
    except InventoryError as exc:
        log.critical('%s', exc)
        return 1
    log.debug('finished in state %s', state.name)
    return 0


def main():
    sys.exit(run())


if __name__ == '__main__':
    main()
