"""Accent color used for device glyphs."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Sequence
from typing import Protocol

logger = logging.getLogger(__name__)

ACCENT_ENV_VAR = "JUBA_ACCENT_COLOR"
FALLBACK_ACCENT = "#3399FF"

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{6})$")


class AccentColorProvider(Protocol):
    def accent_color(self) -> str | None: ...


def normalize_color(value: str | None) -> str | None:
    if not value:
        return None
    match = _HEX_COLOR.match(value.strip())
    if match is None:
        logger.debug("Ignoring malformed accent color %r", value)
        return None
    return f"#{match.group(1).upper()}"


class FixedAccent:
    def __init__(self, color: str | None) -> None:
        self._color = color

    def accent_color(self) -> str | None:
        return normalize_color(self._color)


class EnvironmentAccent:
    def __init__(self, env_var: str = ACCENT_ENV_VAR) -> None:
        self._env_var = env_var

    def accent_color(self) -> str | None:
        return normalize_color(os.environ.get(self._env_var))


class ChainedAccent:
    """First provider with an answer wins."""

    def __init__(self, providers: Sequence[AccentColorProvider]) -> None:
        self._providers = tuple(providers)

    def accent_color(self) -> str | None:
        for provider in self._providers:
            color = provider.accent_color()
            if color is not None:
                return color
        return None


def resolve_accent_color(provider: AccentColorProvider | None) -> str:
    if provider is None:
        return FALLBACK_ACCENT
    return provider.accent_color() or FALLBACK_ACCENT
