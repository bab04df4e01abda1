"""Data models for juba."""

from juba.models.device import Adapter, DeviceRecord
from juba.models.snapshot import DevicePlacement, Placement, ProximitySnapshot

__all__ = [
    "Adapter",
    "DevicePlacement",
    "DeviceRecord",
    "Placement",
    "ProximitySnapshot",
]
