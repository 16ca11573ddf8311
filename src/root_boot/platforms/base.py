from __future__ import annotations
from typing import List, Optional, Protocol

from root_boot.models import BootDevice


class DeviceInventory(Protocol):
    def list_devices(self) -> List[BootDevice]:
        ...


class BootConfigurator(Protocol):
    def resolve_target(self, device: BootDevice) -> Optional[str]:
        """Entry id or partition spec to boot from, None when nothing matches."""
        ...

    def apply_target(self, target: str) -> tuple[bool, str]:
        ...

    def reboot_now(self) -> tuple[bool, str]:
        ...


class BootManager(DeviceInventory, BootConfigurator, Protocol):
    pass
