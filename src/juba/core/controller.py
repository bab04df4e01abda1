from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from enum import StrEnum
from typing import Any, Protocol

from juba.config import Settings
from juba.models import Adapter, DevicePlacement, ProximitySnapshot
from juba.theme import AccentColorProvider, resolve_accent_color

from .events import (
    DeselectAdapter,
    DeviceDiscovered,
    Event,
    EventKind,
    EventSink,
    Hide,
    RescanDue,
    ResetFocus,
    ScanFailed,
    ScanFinished,
    SelectAdapter,
    ToggleFocus,
    ToggleStar,
)
from .layout import layout
from .registry import DeviceRegistry, DiscoveryOutcome
from .scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)


class ControllerState(StrEnum):
    UNSELECTED = "unselected"
    SCANNING = "scanning"


class Discovery(Protocol):
    def start(self) -> None: ...

    def stop(self) -> None: ...


DiscoveryFactory = Callable[[Adapter, EventSink], Discovery]


class Renderer(Protocol):
    def render(self, snapshot: ProximitySnapshot) -> None: ...


class ProximityController:
    """Single owner of the device registry.

    Every discovery callback, timer and user command goes through handle(),
    which processes events one at a time in arrival order. Events raised
    while another one is being handled are queued behind it.
    """

    def __init__(
        self,
        discovery_factory: DiscoveryFactory,
        scheduler: Scheduler,
        renderer: Renderer,
        settings: Settings | None = None,
        theme: AccentColorProvider | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._discovery_factory = discovery_factory
        self._scheduler = scheduler
        self._renderer = renderer
        self._accent_color = resolve_accent_color(theme)

        self._registry = DeviceRegistry(self._settings.distance)
        self._state = ControllerState.UNSELECTED
        self._adapter: Adapter | None = None
        self._discovery: Discovery | None = None
        self._rescan: TimerHandle | None = None
        self._last_error: str | None = None
        self._snapshot = ProximitySnapshot(accent_color=self._accent_color)

        self._queue: deque[Event] = deque()
        self._dispatching = False
        self._handlers: dict[EventKind, Callable[[Any], None]] = {
            EventKind.SELECT_ADAPTER: self._on_select_adapter,
            EventKind.DESELECT_ADAPTER: self._on_deselect_adapter,
            EventKind.DEVICE_DISCOVERED: self._on_device_discovered,
            EventKind.SCAN_FINISHED: self._on_scan_finished,
            EventKind.SCAN_FAILED: self._on_scan_failed,
            EventKind.RESCAN_DUE: self._on_rescan_due,
            EventKind.HIDE: self._on_hide,
            EventKind.TOGGLE_STAR: self._on_toggle_star,
            EventKind.TOGGLE_FOCUS: self._on_toggle_focus,
            EventKind.RESET_FOCUS: self._on_reset_focus,
        }

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def adapter(self) -> Adapter | None:
        return self._adapter

    @property
    def registry(self) -> DeviceRegistry:
        return self._registry

    @property
    def snapshot(self) -> ProximitySnapshot:
        return self._snapshot

    @property
    def last_error(self) -> str | None:
        return self._last_error

    def handle(self, event: Event) -> None:
        self._queue.append(event)
        if self._dispatching:
            return
        self._dispatching = True
        try:
            while self._queue:
                self._dispatch(self._queue.popleft())
        except Exception:
            # events queued behind a failed one must not replay later
            self._queue.clear()
            raise
        finally:
            self._dispatching = False

    def _dispatch(self, event: Event) -> None:
        handler = self._handlers.get(event.kind)
        if handler is None:
            raise RuntimeError(f"No handler for event {event!r}")
        handler(event)

    # Convenience entry points, each one is a single event.

    def select_adapter(self, adapter: Adapter) -> None:
        self.handle(SelectAdapter(adapter=adapter))

    def deselect_adapter(self) -> None:
        self.handle(DeselectAdapter())

    def on_discovered(self, address: str, display_name: str, rssi: int) -> None:
        self.handle(
            DeviceDiscovered(
                address=address, display_name=display_name, signal_strength=rssi
            )
        )

    def on_scan_round_complete(self) -> None:
        self.handle(ScanFinished())

    def hide(self, address: str) -> None:
        self.handle(Hide(address=address))

    def toggle_star(self, address: str) -> None:
        self.handle(ToggleStar(address=address))

    def toggle_focus(self, address: str) -> None:
        self.handle(ToggleFocus(address=address))

    def reset_focus(self) -> None:
        self.handle(ResetFocus())

    def close(self) -> None:
        """Stop discovery and pending rescans, keeping the last snapshot."""
        self._halt()

    # Handlers

    def _on_select_adapter(self, event: SelectAdapter) -> None:
        self._halt()
        self._registry.clear()
        self._last_error = None
        self._adapter = None
        self._state = ControllerState.UNSELECTED

        discovery = self._discovery_factory(event.adapter, self.handle)
        discovery.start()
        self._discovery = discovery
        self._adapter = event.adapter
        self._state = ControllerState.SCANNING
        logger.info(
            "Scanning with adapter %s (%s)", event.adapter.name, event.adapter.address
        )
        self._recompute()

    def _on_deselect_adapter(self, event: DeselectAdapter) -> None:
        if self._state is ControllerState.UNSELECTED:
            return
        self._halt()
        self._registry.clear()
        self._adapter = None
        self._state = ControllerState.UNSELECTED
        logger.info("Adapter deselected")
        self._recompute()

    def _on_device_discovered(self, event: DeviceDiscovered) -> None:
        if self._state is not ControllerState.SCANNING:
            logger.debug("Discovery of %s while not scanning, dropped", event.address)
            return
        outcome = self._registry.discover(
            event.address, event.display_name, event.signal_strength
        )
        if outcome is DiscoveryOutcome.CREATED:
            self._recompute()

    def _on_scan_finished(self, event: ScanFinished) -> None:
        if self._state is not ControllerState.SCANNING:
            return
        self._cancel_rescan()
        delay = self._settings.scanning.rescan_delay
        logger.debug("Scan round complete, rescanning in %.1fs", delay)
        self._rescan = self._scheduler.schedule_once(
            delay, lambda: self.handle(RescanDue())
        )

    def _on_rescan_due(self, event: RescanDue) -> None:
        self._rescan = None
        if self._state is not ControllerState.SCANNING or self._discovery is None:
            return
        self._discovery.start()

    def _on_scan_failed(self, event: ScanFailed) -> None:
        if self._state is not ControllerState.SCANNING:
            return
        logger.error("Discovery stopped: %s", event.message)
        self._halt()
        self._registry.clear()
        self._adapter = None
        self._state = ControllerState.UNSELECTED
        self._last_error = event.message
        self._recompute()

    def _on_hide(self, event: Hide) -> None:
        self._registry.set_hidden(event.address)
        self._recompute()

    def _on_toggle_star(self, event: ToggleStar) -> None:
        self._registry.toggle_starred(event.address)
        self._recompute()

    def _on_toggle_focus(self, event: ToggleFocus) -> None:
        self._registry.toggle_focus(event.address)
        self._recompute()

    def _on_reset_focus(self, event: ResetFocus) -> None:
        self._registry.clear_focus()
        self._recompute()

    # Internals

    def _cancel_rescan(self) -> None:
        if self._rescan is not None:
            self._rescan.cancel()
            self._rescan = None

    def _halt(self) -> None:
        """Stop the discovery session and any pending rescan."""
        self._cancel_rescan()
        if self._discovery is not None:
            self._discovery.stop()
            self._discovery = None

    def _recompute(self) -> None:
        registry = self._registry
        visible = registry.visible_addresses()
        distances = []
        for address in visible:
            record = registry.get(address)
            if record is not None:
                distances.append((address, record.estimated_distance))
        placements = layout(
            distances,
            focused=registry.focus_address is not None,
            geometry=self._settings.layout,
        )

        devices = tuple(
            DevicePlacement(
                address=record.address,
                display_name=record.label,
                estimated_distance=record.estimated_distance,
                signal_strength=record.signal_strength,
                starred=record.starred,
                visible=record.address in placements,
                placement=placements.get(record.address),
            )
            for record in registry
        )
        self._snapshot = ProximitySnapshot(
            adapter=self._adapter.address if self._adapter else None,
            focused=registry.focus_address,
            accent_color=self._accent_color,
            devices=devices,
            last_error=self._last_error,
        )
        self._renderer.render(self._snapshot)
