"""Foundational numerology: dates, core numbers, grid, yogas and recurrences."""

from __future__ import annotations

from .catalog import (
    compatibility_catalog_from_data,
    default_compatibility_catalog,
    default_recurrence_table,
    default_yoga_catalog,
    load_compatibility_catalog,
    load_recurrence_table,
    load_yoga_catalog,
    recurrence_table_from_data,
    yoga_catalog_from_data,
)
from .compatibility import CompatibilityInsight, CompatibilityResult, compatibility
from .core import CoreNumbers, basic_number, core_numbers, destiny_number
from .dates import BirthDate, add_years, calendar_date, coerce_birth_date, parse_birth_date
from .grid import (
    GRID_LAYOUT,
    PLANES,
    DigitHistogram,
    GridResult,
    PlaneReading,
    PlaneStatus,
    build_grid,
    plane_report,
    plane_status,
)
from .recurrence import RecurrenceFinding, RecurrenceTable, analyze_recurrences
from .reduction import MASTER_NUMBERS, digit_sum, next_number, reduce_number
from .report import NumerologyReport, build_report
from .rules import BasicDestinyGate, DigitRule
from .text import LANGUAGES, get_text
from .yogas import YogaEntry, evaluate_yogas

__all__ = [
    "BirthDate",
    "parse_birth_date",
    "coerce_birth_date",
    "calendar_date",
    "add_years",
    "MASTER_NUMBERS",
    "digit_sum",
    "reduce_number",
    "next_number",
    "CoreNumbers",
    "basic_number",
    "destiny_number",
    "core_numbers",
    "GRID_LAYOUT",
    "PLANES",
    "DigitHistogram",
    "GridResult",
    "PlaneReading",
    "PlaneStatus",
    "build_grid",
    "plane_status",
    "plane_report",
    "DigitRule",
    "BasicDestinyGate",
    "YogaEntry",
    "evaluate_yogas",
    "RecurrenceTable",
    "RecurrenceFinding",
    "analyze_recurrences",
    "LANGUAGES",
    "get_text",
    "yoga_catalog_from_data",
    "recurrence_table_from_data",
    "load_yoga_catalog",
    "load_recurrence_table",
    "default_yoga_catalog",
    "default_recurrence_table",
    "NumerologyReport",
    "build_report",
    "CompatibilityInsight",
    "CompatibilityResult",
    "compatibility",
    "compatibility_catalog_from_data",
    "load_compatibility_catalog",
    "default_compatibility_catalog",
]
