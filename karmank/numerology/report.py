"""Foundational numerology report."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

from ..errors import IncompleteInput
from .catalog import (
    default_compatibility_catalog,
    default_recurrence_table,
    default_yoga_catalog,
    load_compatibility_catalog,
    load_recurrence_table,
    load_yoga_catalog,
)
from .compatibility import CompatibilityInsight
from .dates import BirthDate, coerce_birth_date
from .grid import GridResult, PlaneReading, build_grid
from .recurrence import RecurrenceFinding, RecurrenceTable, analyze_recurrences
from .yogas import YogaEntry, evaluate_yogas

if TYPE_CHECKING:  # pragma: no cover
    from ..config.settings import Settings

LOG = logging.getLogger(__name__)

__all__ = ["NumerologyReport", "build_report", "catalogs_for", "compatibility_catalog_for"]


@dataclass(frozen=True)
class NumerologyReport:
    """Immutable result of one (name, date of birth) submission."""

    name: str
    grid: GridResult
    yogas: tuple[YogaEntry, ...]
    recurrences: tuple[RecurrenceFinding, ...]
    language: str = "en"

    @property
    def birth(self) -> BirthDate:
        return self.grid.birth

    @property
    def basic(self) -> int:
        return self.grid.basic

    @property
    def destiny(self) -> int:
        return self.grid.destiny

    @property
    def planes(self) -> dict[str, PlaneReading]:
        return self.grid.planes()

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "language": self.language,
            "grid": self.grid.to_dict(),
            "yogas": [entry.to_payload(self.language) for entry in self.yogas],
            "recurrences": [finding.to_dict() for finding in self.recurrences],
        }


def catalogs_for(
    settings: Settings | None,
) -> tuple[Sequence[YogaEntry], RecurrenceTable]:
    """Return the yoga catalog and recurrence table selected by ``settings``."""

    yogas_path = settings.catalogs.yogas_path if settings else None
    recurring_path = settings.catalogs.recurring_path if settings else None
    yogas = load_yoga_catalog(Path(yogas_path)) if yogas_path else default_yoga_catalog()
    table = (
        load_recurrence_table(Path(recurring_path))
        if recurring_path
        else default_recurrence_table()
    )
    return yogas, table


def compatibility_catalog_for(settings: Settings | None) -> Mapping[str, CompatibilityInsight]:
    path = settings.catalogs.compatibility_path if settings else None
    return load_compatibility_catalog(Path(path)) if path else default_compatibility_catalog()


def _missing_inputs(name: object, dob: object) -> list[str]:
    missing = []
    if not isinstance(name, str) or not name.strip():
        missing.append("name")
    if dob is None or (isinstance(dob, str) and not dob.strip()):
        missing.append("dob")
    return missing


def build_report(
    name: str,
    dob: BirthDate | date | str,
    *,
    yoga_catalog: Sequence[YogaEntry] | None = None,
    recurrence_table: RecurrenceTable | None = None,
    settings: Settings | None = None,
    language: str | None = None,
) -> NumerologyReport:
    """Compute the foundational report for ``name`` born on ``dob``.

    Blank inputs raise :class:`~karmank.errors.IncompleteInput` before any
    computation; malformed dates raise
    :class:`~karmank.errors.InvalidDateFormat`. Catalogs default to those
    named in ``settings`` or, failing that, the bundled ones.
    """

    missing = _missing_inputs(name, dob)
    if missing:
        raise IncompleteInput(missing)

    birth = coerce_birth_date(dob)
    numerology = settings.numerology if settings else None
    preserve = numerology.preserve_master_numbers if numerology else False
    lang = language or (numerology.language if numerology else "en")

    if yoga_catalog is None or recurrence_table is None:
        default_yogas, default_table = catalogs_for(settings)
        yoga_catalog = default_yogas if yoga_catalog is None else yoga_catalog
        recurrence_table = default_table if recurrence_table is None else recurrence_table

    grid = build_grid(birth, preserve_master_numbers=preserve)
    basic, destiny = grid.core.basic_root, grid.core.destiny_root
    yogas = evaluate_yogas(yoga_catalog, grid.histogram, basic, destiny)
    recurrences = analyze_recurrences(
        grid.histogram,
        destiny,
        recurrence_table,
        basic=basic,
        language=lang,
        min_repeat=numerology.min_repeat if numerology else 2,
        destiny_fallback=numerology.destiny_fallback if numerology else False,
    )
    LOG.debug(
        "report for %s: basic=%s destiny=%s yogas=%d recurrences=%d",
        birth.isoformat(),
        grid.basic,
        grid.destiny,
        len(yogas),
        len(recurrences),
    )
    return NumerologyReport(
        name=name.strip(),
        grid=grid,
        yogas=tuple(yogas),
        recurrences=tuple(recurrences),
        language=lang,
    )
