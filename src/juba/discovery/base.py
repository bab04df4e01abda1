"""Scan session plumbing shared by the discovery backends."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod

from juba.core.events import (
    DeviceDiscovered,
    Event,
    EventSink,
    ScanFailed,
    ScanFinished,
)
from juba.models import Adapter

logger = logging.getLogger(__name__)


class ScanSession(ABC):
    """Runs one timed scan per start() on the current event loop.

    Events are forwarded to the sink only while the session that produced
    them is current; stop() invalidates anything still in flight. Every
    round ends with exactly one ScanFinished or ScanFailed.
    """

    scan_errors: tuple[type[Exception], ...] = (OSError,)

    def __init__(self, adapter: Adapter, sink: EventSink, timeout: float) -> None:
        self.adapter = adapter
        self.timeout = timeout
        self._sink = sink
        self._generation = 0
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            logger.debug("Scan on %s already running", self.adapter.name)
            return
        self._generation += 1
        generation = self._generation
        logger.debug(
            "Starting scan on %s (timeout=%.1fs)", self.adapter.name, self.timeout
        )
        self._task = asyncio.get_running_loop().create_task(self._run(generation))

    def stop(self) -> None:
        self._generation += 1
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _run(self, generation: int) -> None:
        try:
            await self._scan(generation)
        except self.scan_errors as exc:
            logger.error("Scan on %s failed: %s", self.adapter.name, exc)
            self._emit(generation, ScanFailed(message=str(exc)))
            return
        except Exception as exc:
            logger.exception("Unexpected error while scanning on %s", self.adapter.name)
            self._emit(generation, ScanFailed(message=str(exc) or type(exc).__name__))
            return
        self._emit(generation, ScanFinished())

    @abstractmethod
    async def _scan(self, generation: int) -> None:
        """Scan for one round, reporting sightings through _discovered()."""

    def _discovered(
        self, generation: int, address: str, name: str | None, rssi: int | None
    ) -> None:
        self._emit(
            generation,
            DeviceDiscovered(
                address=address,
                display_name=name or "",
                signal_strength=rssi or 0,
            ),
        )

    def _emit(self, generation: int, event: Event) -> None:
        if generation != self._generation:
            logger.debug("Dropping %s from a stopped scan", event.kind)
            return
        self._sink(event)
