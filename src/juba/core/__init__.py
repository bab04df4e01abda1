from __future__ import annotations

from .controller import ControllerState, ProximityController
from .distance import UNKNOWN_DISTANCE, estimate, resolve_distance
from .layout import layout, proximity_ratio
from .registry import DeviceRegistry, DiscoveryOutcome
from .scheduler import AsyncioScheduler

__all__ = [
    "AsyncioScheduler",
    "ControllerState",
    "DeviceRegistry",
    "DiscoveryOutcome",
    "ProximityController",
    "UNKNOWN_DISTANCE",
    "estimate",
    "layout",
    "proximity_ratio",
    "resolve_distance",
]
