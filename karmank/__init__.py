"""KarmAnk: numerology reports and dasha period timelines."""

from __future__ import annotations

from .dasha import ActiveLayers, DashaCalculator, PeriodSpan, dasha_calculator, find_active
from .errors import (
    CatalogValidationError,
    ExternalGenerationFailure,
    IncompleteInput,
    InvalidDateFormat,
    KarmAnkError,
)
from .numerology import (
    BirthDate,
    CoreNumbers,
    DigitHistogram,
    NumerologyReport,
    build_grid,
    build_report,
    compatibility,
    core_numbers,
    parse_birth_date,
    reduce_number,
)
from .session import ReportSession

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "KarmAnkError",
    "InvalidDateFormat",
    "IncompleteInput",
    "CatalogValidationError",
    "ExternalGenerationFailure",
    "BirthDate",
    "parse_birth_date",
    "reduce_number",
    "CoreNumbers",
    "core_numbers",
    "DigitHistogram",
    "build_grid",
    "NumerologyReport",
    "build_report",
    "compatibility",
    "PeriodSpan",
    "ActiveLayers",
    "find_active",
    "DashaCalculator",
    "dasha_calculator",
    "ReportSession",
]
