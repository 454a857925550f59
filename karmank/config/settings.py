"""Configuration models and helpers for KarmAnk settings."""

from __future__ import annotations

import os
from copy import deepcopy
from pathlib import Path
from typing import Dict, Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from ..dasha.tiler import MONTHLY_DURATIONS as DEFAULT_MONTHLY_DURATIONS

CURRENT_SETTINGS_SCHEMA_VERSION = 2

# -------------------- Settings Schema --------------------


class NumerologyCfg(BaseModel):
    """Options for the foundational number report."""

    preserve_master_numbers: bool = False
    min_repeat: int = Field(2, ge=2, le=9)
    destiny_fallback: bool = False
    language: Literal["en", "hi", "en-hi"] = "en"


class DashaCfg(BaseModel):
    """Period timeline generation options."""

    horizon_years: int = Field(120, ge=1, le=200)
    monthly_durations: Dict[int, int] = Field(
        default_factory=lambda: dict(DEFAULT_MONTHLY_DURATIONS)
    )

    @field_validator("monthly_durations")
    @classmethod
    def _check_durations(cls, value: Dict[int, int]) -> Dict[int, int]:
        for number, days in value.items():
            if not 1 <= number <= 9:
                raise ValueError(f"monthly duration keys must lie in 1..9, got {number}")
            if days <= 0:
                raise ValueError(f"monthly duration for {number} must be positive")
        missing = sorted(set(range(1, 10)) - set(value))
        if missing:
            raise ValueError(f"monthly durations missing for {missing}")
        return value


class CatalogCfg(BaseModel):
    """Locations of the yoga, recurrence and compatibility catalogs.

    ``None`` selects the catalogs bundled with the package.
    """

    yogas_path: Optional[str] = None
    recurring_path: Optional[str] = None
    compatibility_path: Optional[str] = None


class NarrativeCfg(BaseModel):
    """External text-generation preferences."""

    enabled: bool = False
    model: str = "gpt-4o-mini"
    temperature: float = 0.7
    base_url: Optional[str] = None

    @field_validator("temperature", mode="before")
    @classmethod
    def _cap_temperature(cls, value: float) -> float:
        numeric = float(value)
        return max(0.0, min(2.0, numeric))


class Settings(BaseModel):
    """Top-level settings model persisted on disk."""

    schema_version: int = Field(
        default=CURRENT_SETTINGS_SCHEMA_VERSION,
        ge=1,
        description="Version marker for persisted configuration payloads.",
    )
    numerology: NumerologyCfg = Field(default_factory=NumerologyCfg)
    dasha: DashaCfg = Field(default_factory=DashaCfg)
    catalogs: CatalogCfg = Field(default_factory=CatalogCfg)
    narrative: NarrativeCfg = Field(default_factory=NarrativeCfg)


# -------------------- I/O Helpers --------------------

CONFIG_FILENAME = "config.yaml"


def get_config_home() -> Path:
    """Return the directory where settings should be stored."""

    return Path(os.environ.get("KARMANK_HOME", str(Path.home() / ".karmank")))


def config_path() -> Path:
    """Return the full path to the configuration file, creating directories as needed."""

    home = get_config_home()
    home.mkdir(parents=True, exist_ok=True)
    return home / CONFIG_FILENAME


def default_settings() -> Settings:
    return Settings()


def save_settings(settings: Settings, path: Optional[Path] = None) -> Path:
    """Persist the given settings to disk as YAML."""

    target_path = Path(path) if path else config_path()
    target_path.parent.mkdir(parents=True, exist_ok=True)
    data = settings.model_dump()
    with target_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(data, handle, sort_keys=False, allow_unicode=True)
    return target_path


def _coerce_schema_version(raw: object) -> int:
    try:
        value = int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 1
    return max(1, value)


def _upgrade_settings_payload(
    data: dict[str, object], *, schema_version: int
) -> tuple[dict[str, object], bool]:
    """Apply in-place upgrades required for older settings payloads."""

    upgraded = deepcopy(data)
    version = max(1, schema_version)
    changed = False

    if version < 2:
        # v1 stored the master-number flag as ``numerology.master_numbers``.
        numerology = upgraded.get("numerology")
        if isinstance(numerology, dict) and "master_numbers" in numerology:
            numerology.setdefault(
                "preserve_master_numbers", bool(numerology.pop("master_numbers"))
            )
        version = 2
        changed = True

    if upgraded.get("schema_version") != version:
        upgraded["schema_version"] = version
        changed = True

    return upgraded, changed


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from disk, creating defaults if missing."""

    source_path = Path(path) if path else config_path()
    if not source_path.exists():
        settings = default_settings()
        save_settings(settings, source_path)
        return settings
    with source_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    if not isinstance(raw, dict):
        raw = {}
    schema_version = _coerce_schema_version(raw.get("schema_version"))
    data, upgraded = _upgrade_settings_payload(raw, schema_version=schema_version)
    settings = Settings(**data)
    if upgraded:
        save_settings(settings, source_path)
    return settings
