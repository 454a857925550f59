"""Dasha period timelines, lookups and grid overlays."""

from __future__ import annotations

from .lookup import DashaCalculator, dasha_calculator, find_active
from .models import LEVELS, VIEWS, ActiveLayers, PeriodSpan
from .overlay import (
    DynamicReading,
    DynamicYoga,
    compose,
    dynamic_reading,
    dynamic_recurrences,
    dynamic_yogas,
)
from .tiler import (
    DEFAULT_HORIZON_YEARS,
    MONTHLY_DURATIONS,
    WEEKDAY_DIGITS,
    build_daily_timeline,
    build_maha_timeline,
    build_monthly_timeline,
    build_yearly_timeline,
    daily_from_monthly,
    weekday_number,
    yearly_span,
)

__all__ = [
    "LEVELS",
    "VIEWS",
    "PeriodSpan",
    "ActiveLayers",
    "DEFAULT_HORIZON_YEARS",
    "MONTHLY_DURATIONS",
    "WEEKDAY_DIGITS",
    "weekday_number",
    "yearly_span",
    "build_maha_timeline",
    "build_yearly_timeline",
    "build_monthly_timeline",
    "build_daily_timeline",
    "daily_from_monthly",
    "find_active",
    "DashaCalculator",
    "dasha_calculator",
    "compose",
    "DynamicYoga",
    "DynamicReading",
    "dynamic_yogas",
    "dynamic_recurrences",
    "dynamic_reading",
]
