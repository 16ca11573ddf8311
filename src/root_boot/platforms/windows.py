from __future__ import annotations
import logging
from typing import List, Optional

from .common import run, spawn, InventoryError
from root_boot.models import BootDevice
from root_boot.parsing import parse_device_table, partition_from_path


log = logging.getLogger(__name__)


class WindowsBootManager:
    def __init__(self, dry_run: bool = False) -> None:
        self.bcdedit = 'bcdedit'
        self.wmic = 'wmic'
        self.dry_run = dry_run

    def _run_bcd(self, args: List[str]):
        """Run bcdedit via cmd.exe to avoid PowerShell argument binding/brace issues."""
        return run(['cmd.exe', '/d', '/c', self.bcdedit, *args], hide_window=True, dry_run=self.dry_run)

    def list_devices(self) -> List[BootDevice]:
        # Disks are not filtered by partition here; bcdedit addresses partitions directly.
        try:
            cp = run([self.wmic, 'diskdrive', 'get', 'DeviceID,Model,Size'], hide_window=True)
        except OSError as exc:
            raise InventoryError(f'Failed to execute {self.wmic}: {exc}') from exc
        return parse_device_table(cp.stdout or '')

    def resolve_target(self, device: BootDevice) -> Optional[str]:
        return partition_from_path(device.path)

    def apply_target(self, target: str) -> tuple[bool, str]:
        try:
            cp = self._run_bcd(['/set', '{bootmgr}', 'device', f'partition={target}'])
        except OSError as exc:
            return False, f'Failed to execute {self.bcdedit}: {exc}'
        if cp.returncode == 0:
            return True, f'{{bootmgr}} device set to partition={target}'
        return False, (cp.stderr or cp.stdout or f'{self.bcdedit} exited with {cp.returncode}').strip()

    def reboot_now(self) -> tuple[bool, str]:
        try:
            spawn(['shutdown', '/r', '/t', '0'], dry_run=self.dry_run)
        except OSError as exc:
            return False, f'Failed to reboot: {exc}'
        return True, 'Reboot requested'
