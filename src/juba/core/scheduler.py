from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Fire-later interface used for the rescan timer."""

    def schedule_once(
        self, delay: float, callback: Callable[[], None]
    ) -> TimerHandle: ...


class AsyncioScheduler:
    """Schedules callbacks on the running event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def schedule_once(
        self, delay: float, callback: Callable[[], None]
    ) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        logger.debug("Scheduling callback in %.1fs", delay)
        return loop.call_later(delay, callback)
