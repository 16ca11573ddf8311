import logging
import platform
import shlex
import shutil
import subprocess
import os
import sys
from typing import List, Mapping, Optional


log = logging.getLogger(__name__)

ENTRY_MODULE = 'root_boot.main'
ENV_PREFIX = 'ROOT_BOOT_'
DISPLAY_ENV = ('DISPLAY', 'XAUTHORITY', 'WAYLAND_DISPLAY', 'XDG_RUNTIME_DIR')


class InventoryError(RuntimeError):
    """The device listing utility could not be launched."""


class ElevationError(RuntimeError):
    """The current executable could not be determined for a privileged relaunch."""


def is_admin() -> bool:
    system = platform.system()
    try:
        if system == 'Windows':
            import ctypes
            return ctypes.windll.shell32.IsUserAnAdmin() != 0
        else:
            return os.geteuid() == 0
    except (AttributeError, OSError):
        return False


def which(cmd: str) -> str | None:
    return shutil.which(cmd)


def run(cmd: List[str], hide_window: bool = False, dry_run: bool = False) -> subprocess.CompletedProcess:
    """Run a command and capture its text output.

    OSError from a missing executable is left to the caller. With ``dry_run``
    the command is only logged and a successful result is returned.
    """
    if dry_run:
        text = 'DRY-RUN: ' + ' '.join(shlex.quote(c) for c in cmd)
        log.info(text)
        return subprocess.CompletedProcess(cmd, 0, text, '')

    kwargs = {
        'capture_output': True,
        'text': True,
        'errors': 'replace',
    }
    if hide_window and platform.system() == 'Windows':
        kwargs['creationflags'] = subprocess.CREATE_NO_WINDOW

    log.debug('exec: %s', cmd)
    cp = subprocess.run(cmd, **kwargs)
    log.debug('exit %s: %s', cp.returncode, cmd)
    return cp


def spawn(cmd: List[str], dry_run: bool = False) -> None:
    """Start a command without waiting for it."""
    if dry_run:
        log.info('DRY-RUN: %s', ' '.join(shlex.quote(c) for c in cmd))
        return
    log.debug('spawn: %s', cmd)
    subprocess.Popen(cmd)


def current_platform() -> str:
    return platform.system()


def current_executable() -> str:
    exe = sys.executable or (sys.argv[0] if sys.argv else '')
    if not exe:
        raise ElevationError('Failed to get current executable')
    return exe


def forwarded_env(environ: Optional[Mapping[str, str]]) -> List[str]:
    """KEY=VAL pairs that must survive sudo's env_reset: our settings and the display."""
    if not environ:
        return []
    env_args = []
    for key in sorted(environ):
        if key.startswith(ENV_PREFIX):
            env_args.append(f'{key}={environ[key]}')
    for key in DISPLAY_ENV:
        val = environ.get(key)
        if val:
            env_args.append(f'{key}={val}')
    return env_args


def build_relaunch_argv(
    exe: str,
    argv: List[str],
    frozen: bool,
    sudo: str = 'sudo',
    environ: Optional[Mapping[str, str]] = None,
) -> List[str]:
    """Command line that reruns this program through sudo.

    When not frozen (PyInstaller) the interpreter is relaunched with
    ``-m root_boot.main``. The original arguments are preserved, and
    ROOT_BOOT_* plus display variables from ``environ`` are passed through
    ``env`` since sudo drops them.
    """
    if frozen:
        relaunch_args = list(argv[1:])
    else:
        relaunch_args = ['-m', ENTRY_MODULE, *argv[1:]]
    env_args = forwarded_env(environ)
    prefix = ['env', *env_args] if env_args else []
    return [sudo, '-S', *prefix, exe, *relaunch_args]


def relaunch_elevated() -> int:
    """Rerun the program with admin/root rights and return the exit code to use."""
    exe = current_executable()
    frozen = getattr(sys, 'frozen', False)

    if current_platform() == 'Windows':
        try:
            import ctypes
            relaunch_args = sys.argv[1:] if frozen else ['-m', ENTRY_MODULE, *sys.argv[1:]]
            cmdline = subprocess.list2cmdline(relaunch_args)
            ret = ctypes.windll.shell32.ShellExecuteW(None, 'runas', exe, cmdline, None, 1)
            if int(ret) > 32:
                return 0
        except (AttributeError, OSError) as exc:
            log.warning('ShellExecuteW runas failed: %s', exc)
        print('Please run this program as Administrator.')
        print("Right-click the executable and select 'Run as administrator'")
        return 1

    sudo = which('sudo') or 'sudo'
    cmd = build_relaunch_argv(exe, sys.argv, frozen, sudo=sudo, environ=os.environ)
    log.debug('relaunching elevated: %s', cmd)
    try:
        status = subprocess.run(cmd).returncode
    except OSError as exc:
        log.error('Failed to run sudo: %s', exc)
        return 1
    return status if status >= 0 else 1
