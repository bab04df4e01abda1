from __future__ import annotations

import json
import os
import tomllib
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .paths import default_config_path, expand_path

CONFIG_ENV_VAR = "JUBA_CONFIG"

DEFAULT_REFERENCE_POWER = -59
DEFAULT_DISTANCE = 1.0


class DistanceConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    # expected RSSI (dBm) at one meter
    reference_power: int = Field(default=DEFAULT_REFERENCE_POWER, lt=0)
    default_distance: float = Field(default=DEFAULT_DISTANCE, gt=0)


class LayoutConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    canvas_width: float = Field(default=800.0, gt=0)
    canvas_height: float = Field(default=600.0, gt=0)
    radius: float = Field(default=250.0, gt=0)
    max_distance: float = Field(default=10.0, gt=0)


class ScanningConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    adapter: str | None = None
    scan_timeout: float = Field(default=7.0, gt=0)
    rescan_delay: float = Field(default=12.0, ge=0)


class ThemeConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    accent_color: str | None = Field(default=None, pattern=r"^#[0-9a-fA-F]{6}$")


class Settings(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    distance: DistanceConfig = Field(default_factory=DistanceConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    scanning: ScanningConfig = Field(default_factory=ScanningConfig)
    theme: ThemeConfig = Field(default_factory=ThemeConfig)


def resolve_config_path(allow_missing: bool = False) -> tuple[Path, bool]:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = expand_path(env_path)
        if not allow_missing and not path.exists():
            raise FileNotFoundError(f"{CONFIG_ENV_VAR} points to missing file: {path}")
        return path, path.exists()

    path = default_config_path()
    return path, path.exists()


def load_settings(path: Path) -> Settings:
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in config file: {path}\n{exc}") from exc

    try:
        return Settings.model_validate(data or {})
    except ValidationError as exc:
        raise ValueError(f"Invalid config file: {path}\n{exc}") from exc


@lru_cache
def get_settings() -> Settings:
    path, exists = resolve_config_path(allow_missing=False)
    if exists:
        return load_settings(path)
    return Settings()


def _toml_string(value: str) -> str:
    return json.dumps(value)


def render_settings_toml(settings: Settings) -> str:
    lines = [
        "# juba configuration",
        "",
        "[distance]",
        f"reference_power = {settings.distance.reference_power}",
        f"default_distance = {settings.distance.default_distance}",
        "",
        "[layout]",
        f"canvas_width = {settings.layout.canvas_width}",
        f"canvas_height = {settings.layout.canvas_height}",
        f"radius = {settings.layout.radius}",
        f"max_distance = {settings.layout.max_distance}",
        "",
        "[scanning]",
    ]
    # TOML has no null, unset optionals are left out
    if settings.scanning.adapter is not None:
        lines.append(f"adapter = {_toml_string(settings.scanning.adapter)}")
    lines += [
        f"scan_timeout = {settings.scanning.scan_timeout}",
        f"rescan_delay = {settings.scanning.rescan_delay}",
        "",
        "[theme]",
    ]
    if settings.theme.accent_color is not None:
        lines.append(f"accent_color = {_toml_string(settings.theme.accent_color)}")
    lines.append("")
    return "\n".join(lines)


def write_settings(settings: Settings, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_settings_toml(settings))
