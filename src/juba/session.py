"""Wires the controller to bleak, the asyncio loop and a renderer."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable

from juba.config import Settings
from juba.core import AsyncioScheduler, ControllerState, ProximityController
from juba.core.controller import DiscoveryFactory, Renderer
from juba.core.events import Event, Hide, ToggleFocus, ToggleStar
from juba.discovery import MockDiscovery
from juba.discovery.bleak_backend import BleakDiscovery
from juba.models import Adapter, ProximitySnapshot
from juba.theme import ChainedAccent, EnvironmentAccent, FixedAccent

logger = logging.getLogger(__name__)

MOCK_INTERVAL = 0.2
POLL_INTERVAL = 0.1


def discovery_factory(settings: Settings, mock: bool = False) -> DiscoveryFactory:
    timeout = settings.scanning.scan_timeout
    if mock:
        return lambda adapter, sink: MockDiscovery(
            adapter, sink, timeout=timeout, interval=MOCK_INTERVAL
        )
    return lambda adapter, sink: BleakDiscovery(adapter, sink, timeout=timeout)


class PresetCommands:
    """Applies hide/star/focus requests to devices as they show up.

    Sits between the controller and the real renderer; the commands it
    issues are queued by the controller behind the current event.
    """

    def __init__(
        self,
        renderer: Renderer,
        hide: Iterable[str] = (),
        star: Iterable[str] = (),
        focus: str | None = None,
    ) -> None:
        self._renderer = renderer
        self._pending: list[tuple[str, Callable[[str], Event]]] = []
        self._pending += [(address.upper(), _hide) for address in hide]
        self._pending += [(address.upper(), _star) for address in star]
        if focus:
            self._pending.append((focus.upper(), _focus))
        self._sink: Callable[[Event], None] | None = None

    def bind(self, sink: Callable[[Event], None]) -> None:
        self._sink = sink

    def render(self, snapshot: ProximitySnapshot) -> None:
        self._renderer.render(snapshot)
        if self._sink is None or not self._pending:
            return
        seen = {device.address.upper(): device.address for device in snapshot.devices}
        remaining = []
        for key, command in self._pending:
            if key in seen:
                event = command(seen[key])
                logger.debug("Applying preset %s to %s", event.kind, seen[key])
                self._sink(event)
            else:
                remaining.append((key, command))
        self._pending = remaining


def _hide(address: str) -> Event:
    return Hide(address=address)


def _star(address: str) -> Event:
    return ToggleStar(address=address)


def _focus(address: str) -> Event:
    return ToggleFocus(address=address)


def build_controller(
    settings: Settings,
    renderer: Renderer,
    mock: bool = False,
    hide: Iterable[str] = (),
    star: Iterable[str] = (),
    focus: str | None = None,
) -> ProximityController:
    presets = PresetCommands(renderer, hide=hide, star=star, focus=focus)
    controller = ProximityController(
        discovery_factory(settings, mock=mock),
        AsyncioScheduler(),
        presets,
        settings=settings,
        theme=ChainedAccent(
            [FixedAccent(settings.theme.accent_color), EnvironmentAccent()]
        ),
    )
    presets.bind(controller.handle)
    return controller


async def run_session(
    controller: ProximityController,
    adapter: Adapter,
    duration: float | None = None,
) -> ProximitySnapshot:
    """Scan with ``adapter`` until ``duration`` elapses or the scan fails.

    Returns the last snapshot taken before scanning stopped.
    """
    loop = asyncio.get_running_loop()
    deadline = None if duration is None else loop.time() + duration

    controller.select_adapter(adapter)
    try:
        # a failed scan drops the controller back to unselected
        while controller.state is ControllerState.SCANNING:
            if deadline is not None and loop.time() >= deadline:
                break
            await asyncio.sleep(POLL_INTERVAL)
    finally:
        controller.close()
    return controller.snapshot
