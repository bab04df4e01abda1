from __future__ import annotations

from .adapters import (
    DEFAULT_ADAPTER,
    find_adapter,
    list_adapters,
    parse_hciconfig,
)
from .base import ScanSession
from .mock import DEFAULT_SIGHTINGS, MOCK_ADAPTER, MockDiscovery

__all__ = [
    "DEFAULT_ADAPTER",
    "DEFAULT_SIGHTINGS",
    "MOCK_ADAPTER",
    "MockDiscovery",
    "ScanSession",
    "find_adapter",
    "list_adapters",
    "parse_hciconfig",
]
