"""Date lookups against dasha timelines."""

from __future__ import annotations

import threading
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from functools import lru_cache

from ..numerology.dates import BirthDate, calendar_date, coerce_birth_date
from .models import LEVELS, VIEWS, ActiveLayers, PeriodSpan, as_date
from .tiler import (
    DEFAULT_HORIZON_YEARS,
    MONTHLY_DURATIONS,
    build_maha_timeline,
    build_monthly_timeline,
    build_yearly_timeline,
    daily_from_monthly,
)

__all__ = ["find_active", "DashaCalculator", "dasha_calculator"]


def find_active(
    timeline: Sequence[PeriodSpan], target: date | datetime
) -> PeriodSpan | None:
    """Return the span of ``timeline`` containing ``target``, if any.

    Timelines never overlap, so the first containing span is the only one.
    """

    day = as_date(target)
    return next((span for span in timeline if span.contains(day)), None)


@dataclass
class DashaCalculator:
    """Precomputes Maha and yearly timelines for repeated lookups.

    Monthly and daily timelines are built on first use for each dasha year
    and kept for later queries; daily spans reuse the cached monthly ones.
    Instances are shared through :func:`dasha_calculator`, so the per-year
    caches are filled under a lock.
    """

    birth: BirthDate
    horizon_years: int = DEFAULT_HORIZON_YEARS
    monthly_durations: Mapping[int, int] = field(default_factory=lambda: dict(MONTHLY_DURATIONS))

    def __post_init__(self) -> None:
        self.birth = coerce_birth_date(self.birth)
        self.maha = build_maha_timeline(self.birth, self.horizon_years)
        self.yearly = build_yearly_timeline(self.birth, horizon_years=self.horizon_years)
        self._monthly: dict[int, tuple[PeriodSpan, ...]] = {}
        self._daily: dict[int, tuple[PeriodSpan, ...]] = {}
        self._lock = threading.Lock()

    def monthly(self, year: int) -> tuple[PeriodSpan, ...]:
        with self._lock:
            if year not in self._monthly:
                self._monthly[year] = build_monthly_timeline(
                    self.birth, year, self.monthly_durations
                )
            return self._monthly[year]

    def daily(self, year: int) -> tuple[PeriodSpan, ...]:
        monthly = self.monthly(year)
        with self._lock:
            if year not in self._daily:
                self._daily[year] = daily_from_monthly(monthly)
            return self._daily[year]

    def dasha_year(self, target: date | datetime) -> int:
        """Return the calendar year in which the dasha year holding ``target`` began."""

        day = as_date(target)
        if day < calendar_date(day.year, self.birth.month, self.birth.day):
            return day.year - 1
        return day.year

    def active_layers(self, target: date | datetime, view: str = "daily") -> ActiveLayers:
        """Resolve the spans containing ``target`` for every level in ``view``."""

        if view not in VIEWS:
            raise ValueError(f"unknown view {view!r}; expected one of {', '.join(VIEWS)}")
        day = as_date(target)
        wanted = LEVELS[: LEVELS.index(view) + 1]
        year = self.dasha_year(day)
        timelines = {
            "maha": lambda: self.maha,
            "yearly": lambda: self.yearly,
            "monthly": lambda: self.monthly(year),
            "daily": lambda: self.daily(year),
        }
        found = {level: find_active(timelines[level](), day) for level in wanted}
        return ActiveLayers(moment=day, **found)


@lru_cache(maxsize=32)
def _cached_calculator(
    birth: BirthDate, horizon_years: int, durations: tuple[tuple[int, int], ...]
) -> DashaCalculator:
    return DashaCalculator(birth, horizon_years, dict(durations))


def dasha_calculator(
    dob: BirthDate | date | str,
    horizon_years: int = DEFAULT_HORIZON_YEARS,
    monthly_durations: Mapping[int, int] | None = None,
) -> DashaCalculator:
    """Return a memoized :class:`DashaCalculator` for ``dob``."""

    durations = monthly_durations if monthly_durations is not None else MONTHLY_DURATIONS
    return _cached_calculator(
        coerce_birth_date(dob), horizon_years, tuple(sorted(durations.items()))
    )
