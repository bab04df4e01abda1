from __future__ import annotations

from .paths import APP_NAME, CONFIG_FILENAME, default_config_path, expand_path
from .settings import (
    CONFIG_ENV_VAR,
    DEFAULT_DISTANCE,
    DEFAULT_REFERENCE_POWER,
    DistanceConfig,
    LayoutConfig,
    ScanningConfig,
    Settings,
    ThemeConfig,
    get_settings,
    load_settings,
    render_settings_toml,
    resolve_config_path,
    write_settings,
)

__all__ = [
    "APP_NAME",
    "CONFIG_ENV_VAR",
    "CONFIG_FILENAME",
    "DEFAULT_DISTANCE",
    "DEFAULT_REFERENCE_POWER",
    "DistanceConfig",
    "LayoutConfig",
    "ScanningConfig",
    "Settings",
    "ThemeConfig",
    "default_config_path",
    "expand_path",
    "get_settings",
    "load_settings",
    "render_settings_toml",
    "resolve_config_path",
    "write_settings",
]
