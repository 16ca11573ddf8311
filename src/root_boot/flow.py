"""Discover, select, retarget and reboot, as one forward-only pass."""
from __future__ import annotations
import enum
import logging
import time
from typing import Callable, List, Optional, Sequence

from root_boot.models import BootDevice
from root_boot.platforms.base import BootManager


log = logging.getLogger(__name__)

DEFAULT_REBOOT_DELAY = 5

Selector = Callable[[Sequence[BootDevice]], Optional[BootDevice]]


class State(enum.Enum):
    DISCOVERING = 'discovering'
    FILTERING = 'filtering'
    AWAITING_SELECTION = 'awaiting_selection'
    RESOLVING = 'resolving'
    MUTATING = 'mutating'
    REBOOTING = 'rebooting'
    DONE = 'done'
    NO_DEVICES_FOUND = 'no_devices_found'
    EXIT_REQUESTED = 'exit_requested'


TERMINAL_STATES = frozenset({State.DONE, State.NO_DEVICES_FOUND, State.EXIT_REQUESTED})

NOT_RESOLVED_MESSAGE = 'Could not automatically set boot device. Manual configuration may be required.'
MUTATION_FAILED_MESSAGE = (
    'Could not set boot device automatically. You may need to:\n'
    '1. Run this program as Administrator/root\n'
    '2. Manually change boot order in BIOS/UEFI settings'
)


class BootFlow:
    """Drives one invocation of the tool.

    The manager, the selection prompt, the sleep and the output sink are all
    injected so the decisions can be exercised without touching a machine.
    Discovery errors (``InventoryError``) propagate; everything after the
    selection only degrades to a printed warning.
    """

    def __init__(
        self,
        manager: BootManager,
        select: Selector,
        reboot_delay: int = DEFAULT_REBOOT_DELAY,
        sleep: Callable[[float], None] = time.sleep,
        echo: Callable[[str], None] = print,
    ) -> None:
        self.manager = manager
        self.select = select
        self.reboot_delay = reboot_delay
        self.sleep = sleep
        self.echo = echo
        self.state: Optional[State] = None
        self.history: List[State] = []
        self.devices: List[BootDevice] = []
        self.selected: Optional[BootDevice] = None

    def _enter(self, state: State) -> None:
        log.debug('state %s -> %s', self.state.name if self.state else None, state.name)
        self.state = state
        self.history.append(state)

    def run(self) -> State:
        self._enter(State.DISCOVERING)
        devices = self.manager.list_devices()

        # Partition filtering happens inside list_devices on platforms that need it.
        self._enter(State.FILTERING)
        self.devices = list(devices)
        if not self.devices:
            self.echo('No bootable devices found.')
            self._enter(State.NO_DEVICES_FOUND)
            return self.state

        self._enter(State.AWAITING_SELECTION)
        device = self.select(self.devices)
        if device is None:
            self.echo('Exiting...')
            self._enter(State.EXIT_REQUESTED)
            return self.state
        self.selected = device
        self.echo(f'Selected device: {device}')

        self._enter(State.RESOLVING)
        self.echo(f'Attempting to set boot device to {device.path}...')
        target = self.manager.resolve_target(device)

        if target is None:
            self.echo(NOT_RESOLVED_MESSAGE)
        else:
            self._enter(State.MUTATING)
            ok, msg = self.manager.apply_target(target)
            if ok:
                log.info(msg)
                self.echo('Boot device set successfully.')
            else:
                log.warning('boot target change failed: %s', msg)
                self.echo(MUTATION_FAILED_MESSAGE)

        self._enter(State.REBOOTING)
        self.echo(f'Rebooting in {self.reboot_delay} seconds...')
        self.sleep(self.reboot_delay)
        ok, msg = self.manager.reboot_now()
        if not ok:
            log.warning('reboot failed: %s', msg)
            self.echo(f'Reboot failed: {msg}')

        self._enter(State.DONE)
        return self.state
