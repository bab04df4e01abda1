"""RSSI to distance heuristic."""

from __future__ import annotations

import math

from juba.config import DEFAULT_DISTANCE, DEFAULT_REFERENCE_POWER

UNKNOWN_DISTANCE = -1.0

# Curve fit for ratios at or beyond the reference power.
_FAR_COEFFICIENT = 0.89976
_FAR_EXPONENT = 7.7095
_FAR_OFFSET = 0.111
_NEAR_EXPONENT = 10


def estimate(
    signal_strength: int, reference_power: int = DEFAULT_REFERENCE_POWER
) -> float:
    """Estimate distance in meters from a signal strength reading in dBm.

    A reading of 0 is unknown and yields UNKNOWN_DISTANCE. Callers should go
    through resolve_distance to get a usable positive value.
    """
    if signal_strength == 0:
        return UNKNOWN_DISTANCE

    ratio = signal_strength / reference_power
    if ratio < 1.0:
        return math.pow(ratio, _NEAR_EXPONENT)
    try:
        return _FAR_COEFFICIENT * math.pow(ratio, _FAR_EXPONENT) + _FAR_OFFSET
    except OverflowError:
        return math.inf


def resolve_distance(
    signal_strength: int,
    reference_power: int = DEFAULT_REFERENCE_POWER,
    default: float = DEFAULT_DISTANCE,
) -> float:
    """Like estimate, but never returns a non-positive distance."""
    if signal_strength * reference_power < 0:
        # opposite signs would make the ratio negative
        return default
    distance = estimate(signal_strength, reference_power)
    return distance if distance > 0 else default
