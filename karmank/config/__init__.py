"""Configuration helpers exposed at :mod:`karmank.config`."""

from __future__ import annotations

from .settings import (
    CURRENT_SETTINGS_SCHEMA_VERSION,
    DEFAULT_MONTHLY_DURATIONS,
    CatalogCfg,
    DashaCfg,
    NarrativeCfg,
    NumerologyCfg,
    Settings,
    config_path,
    default_settings,
    get_config_home,
    load_settings,
    save_settings,
)

__all__ = [
    "CURRENT_SETTINGS_SCHEMA_VERSION",
    "DEFAULT_MONTHLY_DURATIONS",
    "Settings",
    "NumerologyCfg",
    "DashaCfg",
    "CatalogCfg",
    "NarrativeCfg",
    "config_path",
    "default_settings",
    "get_config_home",
    "load_settings",
    "save_settings",
]
