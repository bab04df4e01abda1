from __future__ import annotations

import asyncio
import logging
import sys
from functools import partial
from typing import Any

from bleak import BleakScanner
from bleak.backends.device import BLEDevice
from bleak.backends.scanner import AdvertisementData
from bleak.exc import BleakError

from juba.core.events import EventSink
from juba.models import Adapter

from .base import ScanSession

logger = logging.getLogger(__name__)


class BleakDiscovery(ScanSession):
    """Timed low-energy scan on one adapter using bleak."""

    scan_errors = (BleakError, OSError)

    def __init__(
        self,
        adapter: Adapter,
        sink: EventSink,
        timeout: float = 7.0,
        scanner_factory: Any = BleakScanner,
    ) -> None:
        super().__init__(adapter, sink, timeout)
        self._scanner_factory = scanner_factory

    def _scanner_kwargs(self) -> dict[str, Any]:
        # bleak only lets BlueZ pick a specific controller
        if sys.platform.startswith("linux"):
            return {"adapter": self.adapter.name}
        return {}

    async def _scan(self, generation: int) -> None:
        scanner = self._scanner_factory(
            detection_callback=partial(self._on_detection, generation),
            **self._scanner_kwargs(),
        )
        await scanner.start()
        try:
            await asyncio.sleep(self.timeout)
        finally:
            await scanner.stop()

    def _on_detection(
        self, generation: int, device: BLEDevice, adv: AdvertisementData
    ) -> None:
        self._discovered(
            generation, device.address, device.name or adv.local_name, adv.rssi
        )
