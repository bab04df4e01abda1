"""Radial placement of visible devices on the proximity canvas."""

from __future__ import annotations

import math
from collections.abc import Sequence

from juba.config import LayoutConfig
from juba.models import Placement


def center(geometry: LayoutConfig) -> tuple[float, float]:
    return geometry.canvas_width / 2, geometry.canvas_height / 2


def proximity_ratio(distance: float, max_distance: float = 10.0) -> float:
    """Map a distance onto [0, 1): near devices approach 1, far ones 0.

    Distances outside (0, max_distance] count as max_distance.
    """
    if distance <= 0 or distance > max_distance:
        distance = max_distance
    return (max_distance - distance) / max_distance


def layout(
    visible: Sequence[tuple[str, float]],
    focused: bool,
    geometry: LayoutConfig | None = None,
) -> dict[str, Placement]:
    """Compute positions for the visible devices.

    ``visible`` holds ``(address, distance)`` pairs in discovery order. In
    focused mode the device sits at the canvas center. Otherwise device ``i``
    of ``n`` gets angle ``2*pi*i/n`` and a radius that grows as the device
    gets closer; the same ratio is used as stacking order.
    """
    geometry = geometry or LayoutConfig()
    cx, cy = center(geometry)

    if focused:
        return {address: Placement(x=cx, y=cy) for address, _ in visible}

    n = len(visible)
    placements: dict[str, Placement] = {}
    for i, (address, distance) in enumerate(visible):
        ratio = proximity_ratio(distance, geometry.max_distance)
        angle = 2 * math.pi * i / n
        placements[address] = Placement(
            x=cx + geometry.radius * ratio * math.cos(angle),
            y=cy + geometry.radius * ratio * math.sin(angle),
            z_order=ratio,
        )
    return placements
