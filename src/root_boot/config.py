from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional


FRONTENDS = ('terminal', 'gui')
_TRUE = {'1', 'true', 'yes', 'on'}
_FALSE = {'', '0', 'false', 'no', 'off'}


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Settings:
    log_level: int = logging.WARNING
    frontend: str = 'terminal'
    reboot_delay: int = 5
    dry_run: bool = False


def _log_level(value: str) -> int:
    level = logging.getLevelName(value.strip().upper())
    if not isinstance(level, int):
        raise ConfigError(f'ROOT_BOOT_LOG_LEVEL: unknown level {value!r}')
    return level


def _reboot_delay(value: str) -> int:
    try:
        delay = int(value)
    except ValueError:
        raise ConfigError(f'ROOT_BOOT_REBOOT_DELAY: not an integer: {value!r}') from None
    if delay < 0:
        raise ConfigError('ROOT_BOOT_REBOOT_DELAY must not be negative')
    return delay


def _flag(name: str, value: str) -> bool:
    v = value.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ConfigError(f'{name}: expected a boolean, got {value!r}')


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Read ROOT_BOOT_* variables from the environment."""
    env = os.environ if environ is None else environ
    defaults = Settings()

    frontend = env.get('ROOT_BOOT_FRONTEND', defaults.frontend).strip().lower()
    if frontend not in FRONTENDS:
        raise ConfigError(f'ROOT_BOOT_FRONTEND must be one of {", ".join(FRONTENDS)}, got {frontend!r}')

    return Settings(
        log_level=_log_level(env['ROOT_BOOT_LOG_LEVEL']) if 'ROOT_BOOT_LOG_LEVEL' in env else defaults.log_level,
        frontend=frontend,
        reboot_delay=_reboot_delay(env['ROOT_BOOT_REBOOT_DELAY']) if 'ROOT_BOOT_REBOOT_DELAY' in env else defaults.reboot_delay,
        dry_run=_flag('ROOT_BOOT_DRY_RUN', env.get('ROOT_BOOT_DRY_RUN', '')),
    )
