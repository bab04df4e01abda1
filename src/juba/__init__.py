"""juba - Bluetooth proximity scanner: estimated device distance on a 2D map."""

from __future__ import annotations

from importlib.metadata import version

from .config import Settings, get_settings
from .core import DeviceRegistry, ProximityController, estimate, layout
from .models import (
    Adapter,
    DevicePlacement,
    DeviceRecord,
    Placement,
    ProximitySnapshot,
)

__all__ = [
    "Adapter",
    "DevicePlacement",
    "DeviceRecord",
    "DeviceRegistry",
    "Placement",
    "ProximityController",
    "ProximitySnapshot",
    "Settings",
    "__version__",
    "estimate",
    "get_settings",
    "layout",
]

__version__ = version("juba")
