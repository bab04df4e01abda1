from __future__ import annotations

import logging
import re
import subprocess
import sys
from pathlib import Path

from juba.models import Adapter

logger = logging.getLogger(__name__)

SYSFS_BLUETOOTH = Path("/sys/class/bluetooth")
DEFAULT_ADAPTER = Adapter(name="default", address="default")

_HCI_HEADER = re.compile(r"^(hci\d+):")
_BD_ADDRESS = re.compile(r"BD Address:\s*([0-9A-Fa-f:]{17})")


def parse_hciconfig(output: str) -> list[Adapter]:
    adapters: list[Adapter] = []
    name: str | None = None
    for line in output.splitlines():
        header = _HCI_HEADER.match(line)
        if header:
            name = header.group(1)
            continue
        match = _BD_ADDRESS.search(line)
        if match and name is not None:
            adapters.append(Adapter(name=name, address=match.group(1).upper()))
            name = None
    return adapters


def _sysfs_adapters(root: Path) -> list[Adapter]:
    if not root.is_dir():
        return []
    adapters = []
    for entry in sorted(root.glob("hci*")):
        # hci0:1 style entries are connections, not controllers
        if ":" in entry.name:
            continue
        address_file = entry / "address"
        address = (
            address_file.read_text().strip().upper()
            if address_file.exists()
            else entry.name
        )
        adapters.append(Adapter(name=entry.name, address=address))
    return adapters


def list_adapters(sysfs_root: Path = SYSFS_BLUETOOTH) -> list[Adapter]:
    """Enumerate local Bluetooth controllers as (name, address) pairs."""
    if not sys.platform.startswith("linux"):
        # other platforms expose only the system adapter to bleak
        return [DEFAULT_ADAPTER]

    try:
        result = subprocess.run(
            ["hciconfig", "-a"],
            capture_output=True,
            text=True,
            timeout=5,
            check=False,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        logger.debug("hciconfig unavailable, falling back to sysfs")
    else:
        adapters = parse_hciconfig(result.stdout)
        if adapters:
            return adapters

    return _sysfs_adapters(sysfs_root)


def find_adapter(adapters: list[Adapter], key: str | None) -> Adapter | None:
    """Pick an adapter by name or address, or the first one when key is None."""
    if not adapters:
        return None
    if key is None:
        return adapters[0]
    for adapter in adapters:
        if key.upper() in (adapter.name.upper(), adapter.address.upper()):
            return adapter
    return None
