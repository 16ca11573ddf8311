from __future__ import annotations
import argparse
from typing import Callable, List, Optional, Sequence

from .platforms.common import current_platform
from .platforms.linux import LinuxBootManager
from .platforms.windows import WindowsBootManager
from .models import BootDevice


PROG = 'root_boot'
VERSION = '0.1.0'

USAGE_LINES = (
    f"Usage: {PROG} [-v|--version]  ->  shows version",
    f"       {PROG}  ->  runs the program",
)


class UsageError(Exception):
    pass


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def get_manager(dry_run: bool = False):
    plat = current_platform()
    return WindowsBootManager(dry_run=dry_run) if plat == 'Windows' else LinuxBootManager(dry_run=dry_run)


def build_parser() -> argparse.ArgumentParser:
    p = _Parser(prog=PROG, add_help=False, allow_abbrev=False, description='Reboot into a chosen storage device')
    p.add_argument('-v', '--version', action='count', default=0, help='Show version')
    return p


def parse_args(argv: Sequence[str]) -> Optional[argparse.Namespace]:
    """Parse the command line; None means it was not understood."""
    try:
        args = build_parser().parse_args(list(argv))
    except UsageError:
        return None
    # '-vv' or '-v --version' is not the version flag
    if args.version > 1:
        return None
    args.version = bool(args.version)
    return args


def usage_text() -> str:
    return "\n".join(USAGE_LINES)


def version_text() -> str:
    return f"{PROG} v{VERSION}"


def format_menu(devices: Sequence[BootDevice]) -> List[str]:
    lines = [f"{i}) {d}" for i, d in enumerate(devices, start=1)]
    lines.append("0) Exit")
    return lines


def select_device_terminal(
    devices: Sequence[BootDevice],
    input_fn: Callable[[str], str] = input,
    echo: Callable[[str], None] = print,
) -> Optional[BootDevice]:
    """Numbered menu on stdin. Returns None for '0' or end of input."""
    echo('Select a device to restart and boot into')
    echo('')
    for line in format_menu(devices):
        echo(line)
    while True:
        try:
            answer = input_fn('Select a boot device: ').strip()
        except EOFError:
            return None
        if answer.isdigit():
            choice = int(answer)
            if choice == 0:
                return None
            if choice <= len(devices):
                return devices[choice - 1]
        echo(f'Please enter a number between 0 and {len(devices)}.')
