"""Events and user commands consumed by the proximity controller."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar

from juba.models import Adapter


class EventKind(StrEnum):
    SELECT_ADAPTER = "select_adapter"
    DESELECT_ADAPTER = "deselect_adapter"
    DEVICE_DISCOVERED = "device_discovered"
    SCAN_FINISHED = "scan_finished"
    SCAN_FAILED = "scan_failed"
    RESCAN_DUE = "rescan_due"
    HIDE = "hide"
    TOGGLE_STAR = "toggle_star"
    TOGGLE_FOCUS = "toggle_focus"
    RESET_FOCUS = "reset_focus"


@dataclass(frozen=True)
class Event:
    kind: ClassVar[EventKind]


@dataclass(frozen=True)
class SelectAdapter(Event):
    adapter: Adapter
    kind: ClassVar[EventKind] = EventKind.SELECT_ADAPTER


@dataclass(frozen=True)
class DeselectAdapter(Event):
    kind: ClassVar[EventKind] = EventKind.DESELECT_ADAPTER


@dataclass(frozen=True)
class DeviceDiscovered(Event):
    address: str
    display_name: str
    signal_strength: int
    kind: ClassVar[EventKind] = EventKind.DEVICE_DISCOVERED


@dataclass(frozen=True)
class ScanFinished(Event):
    kind: ClassVar[EventKind] = EventKind.SCAN_FINISHED


@dataclass(frozen=True)
class ScanFailed(Event):
    message: str
    kind: ClassVar[EventKind] = EventKind.SCAN_FAILED


@dataclass(frozen=True)
class RescanDue(Event):
    kind: ClassVar[EventKind] = EventKind.RESCAN_DUE


@dataclass(frozen=True)
class Hide(Event):
    address: str
    kind: ClassVar[EventKind] = EventKind.HIDE


@dataclass(frozen=True)
class ToggleStar(Event):
    address: str
    kind: ClassVar[EventKind] = EventKind.TOGGLE_STAR


@dataclass(frozen=True)
class ToggleFocus(Event):
    address: str
    kind: ClassVar[EventKind] = EventKind.TOGGLE_FOCUS


@dataclass(frozen=True)
class ResetFocus(Event):
    kind: ClassVar[EventKind] = EventKind.RESET_FOCUS


EventSink = Callable[[Event], None]
