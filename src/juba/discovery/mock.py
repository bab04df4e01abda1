"""Scripted discovery backend for demos and tests without a radio."""

from __future__ import annotations

import asyncio

from juba.core.events import EventSink
from juba.models import Adapter

from .base import ScanSession

MOCK_ADAPTER = Adapter(name="mock0", address="00:00:00:00:00:00")

DEFAULT_SIGHTINGS: tuple[tuple[str, str, int], ...] = (
    ("AA:11:22:33:44:01", "Phone", -59),
    ("AA:11:22:33:44:02", "Headphones", -48),
    ("AA:11:22:33:44:03", "Smart Watch", -66),
    ("AA:11:22:33:44:04", "TV", -81),
    ("AA:11:22:33:44:05", "", -90),
    ("AA:11:22:33:44:06", "Keyboard", 0),
)


class MockDiscovery(ScanSession):
    """Replays a fixed list of sightings once per scan round."""

    def __init__(
        self,
        adapter: Adapter,
        sink: EventSink,
        timeout: float = 7.0,
        sightings: tuple[tuple[str, str, int], ...] = DEFAULT_SIGHTINGS,
        interval: float = 0.0,
    ) -> None:
        super().__init__(adapter, sink, timeout)
        self.sightings = sightings
        self.interval = interval

    async def _scan(self, generation: int) -> None:
        for address, name, rssi in self.sightings:
            await asyncio.sleep(self.interval)
            self._discovered(generation, address, name, rssi)
