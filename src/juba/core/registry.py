from __future__ import annotations

import logging
from collections.abc import Iterator
from enum import StrEnum

from juba.config import DistanceConfig
from juba.models import DeviceRecord

from .distance import resolve_distance

logger = logging.getLogger(__name__)


class DiscoveryOutcome(StrEnum):
    CREATED = "created"
    IGNORED = "ignored"


class DeviceRegistry:
    """Devices seen during one scan session, in discovery order.

    The first discovery of an address wins: later sightings never refresh the
    name, the signal strength or the distance. Unknown addresses passed to the
    user commands are ignored.
    """

    def __init__(self, distance: DistanceConfig | None = None) -> None:
        self._distance = distance or DistanceConfig()
        self._records: dict[str, DeviceRecord] = {}
        self._focus: str | None = None

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, address: object) -> bool:
        return address in self._records

    def __iter__(self) -> Iterator[DeviceRecord]:
        return iter(list(self._records.values()))

    @property
    def focus_address(self) -> str | None:
        return self._focus

    def get(self, address: str) -> DeviceRecord | None:
        return self._records.get(address)

    def discover(
        self, address: str, display_name: str, signal_strength: int
    ) -> DiscoveryOutcome:
        if address in self._records:
            logger.debug("Ignoring repeated discovery of %s", address)
            return DiscoveryOutcome.IGNORED

        distance = resolve_distance(
            signal_strength,
            reference_power=self._distance.reference_power,
            default=self._distance.default_distance,
        )
        self._records[address] = DeviceRecord(
            address=address,
            display_name=display_name,
            signal_strength=signal_strength,
            estimated_distance=distance,
        )
        logger.debug(
            "Discovered %s (%s) at %d dBm, ~%.2f m",
            address,
            display_name or "unnamed",
            signal_strength,
            distance,
        )
        return DiscoveryOutcome.CREATED

    def set_hidden(self, address: str) -> None:
        record = self._records.get(address)
        if record is None:
            logger.debug("Hide ignored for unknown device %s", address)
            return
        record.hidden = True
        # a hidden device cannot stay the only visible one
        if self._focus == address:
            self._focus = None

    def toggle_starred(self, address: str) -> bool | None:
        record = self._records.get(address)
        if record is None:
            logger.debug("Star ignored for unknown device %s", address)
            return None
        record.starred = not record.starred
        return record.starred

    def toggle_focus(self, address: str) -> str | None:
        if address not in self._records:
            logger.debug("Focus ignored for unknown device %s", address)
            return self._focus
        self._focus = None if self._focus == address else address
        return self._focus

    def clear_focus(self) -> None:
        self._focus = None

    def clear(self) -> None:
        self._records.clear()
        self._focus = None

    def visible_addresses(self) -> list[str]:
        if self._focus is not None:
            return [self._focus]
        return [
            address for address, record in self._records.items() if not record.hidden
        ]
