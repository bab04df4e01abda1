from __future__ import annotations

from pydantic import BaseModel, Field


class Placement(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    x: float
    y: float
    z_order: float = 0.0


class DevicePlacement(BaseModel):
    """Everything a renderer needs to draw one device and its details view."""

    model_config = {"frozen": True, "extra": "forbid"}

    address: str
    display_name: str
    estimated_distance: float
    signal_strength: int
    starred: bool
    visible: bool
    placement: Placement | None = None

    @property
    def distance_text(self) -> str:
        return f"{self.estimated_distance:.2f} meters"


class ProximitySnapshot(BaseModel):
    """Immutable view of the registry and its layout after one recompute."""

    model_config = {"frozen": True, "extra": "forbid"}

    adapter: str | None = None
    focused: str | None = None
    accent_color: str = "#3399FF"
    devices: tuple[DevicePlacement, ...] = Field(default_factory=tuple)
    last_error: str | None = None

    def get(self, address: str) -> DevicePlacement | None:
        for device in self.devices:
            if device.address == address:
                return device
        return None

    @property
    def visible(self) -> tuple[DevicePlacement, ...]:
        return tuple(device for device in self.devices if device.visible)
