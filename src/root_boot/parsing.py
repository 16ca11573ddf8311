"""Scraping helpers for the text printed by lsblk, wmic and efibootmgr.

None of these tools offers a structured interface we can rely on, so every
heuristic lives here and the platform managers only feed text in.
"""
from __future__ import annotations
import re
from typing import List, Optional

from root_boot.models import BootDevice, UNKNOWN_MODEL


PARTITION_MARKER = 'part'
DISK_DESCRIPTOR_MARKER = 'HD('

# 'Boot0001* ...' (active) or 'Boot0001  ...' (inactive)
_ENTRY_RE = re.compile(r"^\s*Boot([0-9A-Fa-f]+)\*?(?:\s|$)")
# 'sdb          1T': the padded MODEL column is empty
_BLANK_MODEL_ROW_RE = re.compile(r"^\s*(\S+)[ \t]{2,}(\S+)\s*$")


def parse_device_table(text: str, path_prefix: str = '') -> List[BootDevice]:
    """Turn NAME/MODEL/SIZE style output into devices, in the order listed.

    The first line is a header. Rows with fewer than three tokens are
    skipped, except a name and size separated by a padded gap, which is a
    row with an empty MODEL column. The model is whatever sits between the
    first and last token, so a tool that reorders its columns will produce
    garbage here.
    """
    devices: List[BootDevice] = []
    for line in text.splitlines()[1:]:
        parts = line.split()
        if len(parts) < 3:
            m = _BLANK_MODEL_ROW_RE.match(line)
            if not m:
                continue
            parts = [m.group(1), '', m.group(2)]
        name, size = parts[0], parts[-1]
        model = ' '.join(parts[1:-1]) or UNKNOWN_MODEL
        devices.append(BootDevice(path=f"{path_prefix}{name}", model=model, size=size))
    return devices


def has_partition_rows(text: str) -> bool:
    return any(PARTITION_MARKER in line for line in text.splitlines())


def strip_device_prefix(path: str, prefix: str) -> str:
    return path.replace(prefix, '')


def find_boot_entry(text: str, device_name: str) -> Optional[str]:
    """Return the number of the first boot entry pointing at ``device_name``.

    A line matches when it carries a hard disk descriptor and mentions the
    bare device name. Substring matching means 'sda' also matches a line
    mentioning 'sda1'; the first match is returned regardless.
    """
    if not device_name:
        return None
    for line in text.splitlines():
        if DISK_DESCRIPTOR_MARKER not in line or device_name not in line:
            continue
        m = _ENTRY_RE.match(line)
        if m:
            return m.group(1)
    return None


def partition_from_path(path: str) -> str:
    letter = path[-1] if path else 'C'
    return f"{letter}:"
