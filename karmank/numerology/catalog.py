"""Loading and validation of yoga, recurrence and compatibility catalogs."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from ..errors import CatalogValidationError
from .compatibility import CompatibilityInsight
from .recurrence import RecurrenceBucket, RecurrenceRule, RecurrenceTable, parse_selector
from .rules import (
    DigitRule,
    normalize_activation_rules,
    normalize_gate,
    normalize_recurrence_conditions,
)
from .yogas import YogaEntry

LOG = logging.getLogger(__name__)

__all__ = [
    "DATA_DIR",
    "DEFAULT_YOGA_CATALOG",
    "DEFAULT_RECURRENCE_TABLE",
    "yoga_catalog_from_data",
    "recurrence_table_from_data",
    "load_yoga_catalog",
    "load_recurrence_table",
    "default_yoga_catalog",
    "default_recurrence_table",
    "DEFAULT_COMPATIBILITY_CATALOG",
    "compatibility_catalog_from_data",
    "load_compatibility_catalog",
    "default_compatibility_catalog",
]

DATA_DIR = Path(__file__).resolve().parent.parent / "data"
DEFAULT_YOGA_CATALOG = DATA_DIR / "yogas.yaml"
DEFAULT_RECURRENCE_TABLE = DATA_DIR / "recurring.yaml"
DEFAULT_COMPATIBILITY_CATALOG = DATA_DIR / "compatibility.yaml"


def _read_yaml(path: Path) -> Any:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogValidationError(f"cannot read catalog {path}: {exc}") from exc
    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as exc:  # pragma: no cover - PyYAML may raise various subclasses
        raise CatalogValidationError(f"failed to parse catalog {path}: {exc}") from exc


# -------------------- Yoga catalog --------------------


def _legacy_rule(payload: Mapping[str, Any]) -> DigitRule | None:
    numbers = payload.get("numbers")
    if not isinstance(numbers, Sequence) or isinstance(numbers, (str, bytes)) or not numbers:
        return None
    empty = payload.get("empty") or []
    return normalize_activation_rules({"allOf": list(numbers), "noneOf": list(empty)})


def _traits(value: Any) -> tuple[Any, ...]:
    if value is None:
        return ()
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return tuple(value)
    return (value,)


def _load_yoga(payload: Mapping[str, Any], *, default_id: str | None) -> YogaEntry:
    activation = payload.get("activation_rules")
    if activation is not None:
        rule = normalize_activation_rules(activation)
    else:
        rule = _legacy_rule(payload)
    entry_id = payload.get("id", default_id)
    category = payload.get("category")
    return YogaEntry(
        id=str(entry_id) if entry_id is not None else None,
        name=payload.get("name"),
        description=payload.get("description"),
        traits=_traits(payload.get("traits")),
        rule=rule,
        gate=normalize_gate(payload),
        category=str(category) if category is not None else None,
    )


def _yoga_items(data: Any) -> Iterable[tuple[Any, str | None, Any]]:
    if isinstance(data, Mapping):
        for key, payload in data.items():
            yield key, str(key), payload
    elif isinstance(data, Sequence) and not isinstance(data, (str, bytes)):
        for index, payload in enumerate(data):
            yield index, None, payload
    else:
        raise CatalogValidationError("yoga catalog must be a list or a mapping of entries")


def yoga_catalog_from_data(data: Any, *, source: str | None = None) -> tuple[YogaEntry, ...]:
    """Normalize a yoga catalog given as a list or an id-keyed mapping.

    A top-level ``yogas`` key is unwrapped first so whole YAML documents can
    be passed directly.
    """

    if data is None:
        return ()
    if isinstance(data, Mapping) and "yogas" in data:
        data = data["yogas"] or []

    errors: list[dict[str, Any]] = []
    entries: list[YogaEntry] = []
    for path_key, default_id, payload in _yoga_items(data):
        if not isinstance(payload, Mapping):
            errors.append({"path": [path_key], "message": "yoga entries must be objects"})
            continue
        try:
            entries.append(_load_yoga(payload, default_id=default_id))
        except ValueError as exc:
            errors.append({"path": [path_key], "message": str(exc)})

    if errors:
        raise CatalogValidationError(
            f"yoga catalog failed validation: {source or '<data>'}", errors=errors
        )
    LOG.debug("loaded %d yoga entries from %s", len(entries), source or "<data>")
    return tuple(entries)


def load_yoga_catalog(path: str | Path | None = None) -> tuple[YogaEntry, ...]:
    """Load a yoga catalog from YAML (JSON is valid YAML too)."""

    target = Path(path) if path else DEFAULT_YOGA_CATALOG
    return yoga_catalog_from_data(_read_yaml(target), source=str(target))


@lru_cache(maxsize=1)
def default_yoga_catalog() -> tuple[YogaEntry, ...]:
    return load_yoga_catalog(DEFAULT_YOGA_CATALOG)


# -------------------- Recurrence table --------------------


def _load_recurrence_entry(payload: Any) -> RecurrenceRule:
    if isinstance(payload, Mapping) and "text" in payload:
        return RecurrenceRule(
            text=payload.get("text"),
            conditions=normalize_recurrence_conditions(payload),
            gate=normalize_gate(payload, nested=False),
            structured=True,
        )
    return RecurrenceRule(text=payload)


def _digit_key(key: Any) -> int:
    digit = int(key)
    if not 1 <= digit <= 9:
        raise ValueError(f"recurrence digits must lie in 1..9, got {digit}")
    return digit


def recurrence_table_from_data(data: Any, *, source: str | None = None) -> RecurrenceTable:
    """Normalize a recurrence table.

    Accepts either a bare ``{digit: {selector: entry}}`` mapping or a document
    with ``recurring`` and optional ``details`` sections.
    """

    if data is None:
        return RecurrenceTable()
    if not isinstance(data, Mapping):
        raise CatalogValidationError("recurrence table must be a mapping")

    details_payload: Any = {}
    if "recurring" in data:
        details_payload = data.get("details") or {}
        data = data["recurring"] or {}
        if not isinstance(data, Mapping):
            raise CatalogValidationError("recurring section must be a mapping")

    errors: list[dict[str, Any]] = []
    buckets: dict[int, RecurrenceBucket] = {}
    for key, bucket_payload in data.items():
        try:
            digit = _digit_key(key)
        except (TypeError, ValueError) as exc:
            errors.append({"path": ["recurring", key], "message": str(exc)})
            continue
        if not isinstance(bucket_payload, Mapping):
            errors.append({"path": ["recurring", key], "message": "bucket must be a mapping"})
            continue
        entries = []
        for selector_key, entry_payload in bucket_payload.items():
            try:
                entries.append((parse_selector(selector_key), _load_recurrence_entry(entry_payload)))
            except ValueError as exc:
                errors.append({"path": ["recurring", key, selector_key], "message": str(exc)})
        buckets[digit] = RecurrenceBucket(entries=tuple(entries))

    details: dict[int, Any] = {}
    if not isinstance(details_payload, Mapping):
        errors.append({"path": ["details"], "message": "details must be a mapping"})
    else:
        for key, value in details_payload.items():
            try:
                details[_digit_key(key)] = value
            except (TypeError, ValueError) as exc:
                errors.append({"path": ["details", key], "message": str(exc)})

    if errors:
        raise CatalogValidationError(
            f"recurrence table failed validation: {source or '<data>'}", errors=errors
        )
    LOG.debug("loaded recurrence buckets for digits %s from %s", sorted(buckets), source or "<data>")
    return RecurrenceTable(buckets=buckets, details=details)


def load_recurrence_table(path: str | Path | None = None) -> RecurrenceTable:
    target = Path(path) if path else DEFAULT_RECURRENCE_TABLE
    return recurrence_table_from_data(_read_yaml(target), source=str(target))


@lru_cache(maxsize=1)
def default_recurrence_table() -> RecurrenceTable:
    return load_recurrence_table(DEFAULT_RECURRENCE_TABLE)


# -------------------- Compatibility catalog --------------------


def _pair_key(key: Any) -> str:
    parts = str(key).split("-")
    if len(parts) != 2 or not all(part.strip().isdigit() for part in parts):
        raise ValueError(f"compatibility keys must look like 'a-b', got {key!r}")
    first, second = (int(part) for part in parts)
    if not (1 <= first <= 9 and 1 <= second <= 9):
        raise ValueError(f"compatibility numbers must lie in 1..9, got {key!r}")
    return f"{first}-{second}"


def _load_insight(payload: Any) -> CompatibilityInsight:
    if not isinstance(payload, Mapping):
        return CompatibilityInsight(summary=payload)
    return CompatibilityInsight(
        summary=payload.get("summary"),
        strengths=_traits(payload.get("strengths")),
        frictions=_traits(payload.get("frictions")),
        remedies=_traits(payload.get("remedies")),
    )


def compatibility_catalog_from_data(
    data: Any, *, source: str | None = None
) -> dict[str, CompatibilityInsight]:
    """Normalize an ``{"a-b": entry}`` mapping; entries may be bare text."""

    if data is None:
        return {}
    if isinstance(data, Mapping) and "combinations" in data:
        data = data["combinations"] or {}
    if not isinstance(data, Mapping):
        raise CatalogValidationError("compatibility catalog must be a mapping")

    errors: list[dict[str, Any]] = []
    insights: dict[str, CompatibilityInsight] = {}
    for key, payload in data.items():
        try:
            insights[_pair_key(key)] = _load_insight(payload)
        except ValueError as exc:
            errors.append({"path": ["combinations", key], "message": str(exc)})

    if errors:
        raise CatalogValidationError(
            f"compatibility catalog failed validation: {source or '<data>'}", errors=errors
        )
    LOG.debug("loaded %d compatibility pairs from %s", len(insights), source or "<data>")
    return insights


def load_compatibility_catalog(path: str | Path | None = None) -> dict[str, CompatibilityInsight]:
    target = Path(path) if path else DEFAULT_COMPATIBILITY_CATALOG
    return compatibility_catalog_from_data(_read_yaml(target), source=str(target))


@lru_cache(maxsize=1)
def default_compatibility_catalog() -> Mapping[str, CompatibilityInsight]:
    return MappingProxyType(load_compatibility_catalog(DEFAULT_COMPATIBILITY_CATALOG))
