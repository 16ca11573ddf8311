from __future__ import annotations
import logging
from typing import List, Optional

from .common import run, spawn, InventoryError
from root_boot.models import BootDevice
from root_boot.parsing import (
    find_boot_entry,
    has_partition_rows,
    parse_device_table,
    strip_device_prefix,
)


log = logging.getLogger(__name__)

DEV_PREFIX = '/dev/'


class LinuxBootManager:
    def __init__(self, dry_run: bool = False) -> None:
        self.lsblk = 'lsblk'
        self.efibootmgr = 'efibootmgr'
        self.dry_run = dry_run

    def _read_inventory(self) -> str:
        try:
            cp = run([self.lsblk, '-d', '-o', 'NAME,MODEL,SIZE'])
        except OSError as exc:
            raise InventoryError(f'Failed to execute {self.lsblk}: {exc}') from exc
        return cp.stdout or ''

    def has_partitions(self, device: BootDevice) -> bool:
        try:
            cp = run([self.lsblk, device.path, '-o', 'TYPE'])
        except OSError as exc:
            log.warning('partition query for %s failed: %s', device.path, exc)
            return False
        return has_partition_rows(cp.stdout or '')

    def list_devices(self) -> List[BootDevice]:
        candidates = parse_device_table(self._read_inventory(), path_prefix=DEV_PREFIX)
        devices = [d for d in candidates if self.has_partitions(d)]
        log.debug('%d of %d disks have partitions', len(devices), len(candidates))
        return devices

    def resolve_target(self, device: BootDevice) -> Optional[str]:
        try:
            cp = run([self.efibootmgr])
        except OSError as exc:
            log.warning('could not list EFI boot entries: %s', exc)
            return None
        entry = find_boot_entry(cp.stdout or '', strip_device_prefix(device.path, DEV_PREFIX))
        if entry is None:
            log.warning('no EFI boot entry references %s', device.path)
        return entry

    def apply_target(self, target: str) -> tuple[bool, str]:
        try:
            cp = run([self.efibootmgr, '-o', target], dry_run=self.dry_run)
        except OSError as exc:
            return False, f'Failed to execute {self.efibootmgr}: {exc}'
        if cp.returncode == 0:
            return True, 'BootOrder set to ' + target
        return False, (cp.stderr or cp.stdout or f'{self.efibootmgr} exited with {cp.returncode}').strip()

    def reboot_now(self) -> tuple[bool, str]:
        try:
            spawn(['systemctl', 'reboot'], dry_run=self.dry_run)
        except OSError as exc:
            return False, f'Failed to reboot: {exc}'
        return True, 'Reboot requested'
