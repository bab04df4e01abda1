from __future__ import annotations

from pydantic import BaseModel, Field


class DeviceRecord(BaseModel):
    """One discovered device, keyed by its hardware address.

    Identity and radio readings are fixed at first discovery; only the
    user flags change afterwards.
    """

    model_config = {"extra": "forbid", "validate_assignment": True}

    address: str = Field(frozen=True)
    display_name: str = Field(default="", frozen=True)
    signal_strength: int = Field(default=0, frozen=True)
    estimated_distance: float = Field(default=1.0, gt=0, frozen=True)
    starred: bool = False
    hidden: bool = False

    @property
    def label(self) -> str:
        return self.display_name or self.address


class Adapter(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    name: str
    address: str
