"""Generation of the Maha, yearly, monthly and daily dasha timelines.

Every timeline is a contiguous run of :class:`PeriodSpan` records: each span
starts on the day after its predecessor ends. Maha and yearly timelines cover
the configured horizon from birth; monthly and daily timelines cover one
dasha year, the yearly span that begins in the requested calendar year.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import MAXYEAR, MINYEAR, date, timedelta
from types import MappingProxyType
from typing import Union

from ..errors import InvalidDateFormat
from ..numerology.core import core_numbers
from ..numerology.dates import BirthDate, add_years, calendar_date, coerce_birth_date
from ..numerology.reduction import next_number, reduce_number
from .models import PeriodSpan

LOG = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_HORIZON_YEARS",
    "WEEKDAY_DIGITS",
    "MONTHLY_DURATIONS",
    "weekday_number",
    "yearly_span",
    "build_maha_timeline",
    "build_yearly_timeline",
    "build_monthly_timeline",
    "build_daily_timeline",
    "daily_from_monthly",
]

BirthInput = Union[BirthDate, date, str]

DEFAULT_HORIZON_YEARS = 120

# Indexed Sunday=0 .. Saturday=6.
WEEKDAY_DIGITS: tuple[int, ...] = (1, 2, 9, 5, 3, 6, 8)

MONTHLY_DURATIONS: Mapping[int, int] = MappingProxyType(
    {
        1: 8,
        2: 16,
        3: 24,
        4: 32,
        5: 41,
        6: 49,
        7: 57,
        8: 64,
        9: 74,
    }
)

_ONE_DAY = timedelta(days=1)


def weekday_number(day: date) -> int:
    """Return the digit assigned to the weekday of ``day``."""

    return WEEKDAY_DIGITS[(day.weekday() + 1) % 7]


def _parse(dob: BirthInput, timeline: str) -> BirthDate | None:
    try:
        return coerce_birth_date(dob)
    except InvalidDateFormat as exc:
        LOG.debug("cannot build %s timeline for %r: %s", timeline, dob, exc)
        return None


def _basic_root(birth: BirthDate) -> int:
    return core_numbers(birth).basic_root


def _years_later(day: date, years: int) -> date:
    """Shift by whole years, saturating at :data:`datetime.date.max`."""

    if day.year + years > MAXYEAR:
        return date.max
    return add_years(day, years)


def _has_yearly_span(year: int) -> bool:
    # The following birthday must be representable.
    return MINYEAR <= year < MAXYEAR


def yearly_span(birth: BirthDate, year: int) -> PeriodSpan:
    """Return the yearly span that starts on the birthday in ``year``."""

    start = calendar_date(year, birth.month, birth.day)
    end = calendar_date(year + 1, birth.month, birth.day) - _ONE_DAY
    number = reduce_number(
        _basic_root(birth) + birth.month + year % 100 + weekday_number(start)
    )
    return PeriodSpan("yearly", number, start, end, calendar_year=year)


def build_maha_timeline(
    dob: BirthInput, horizon_years: int = DEFAULT_HORIZON_YEARS
) -> tuple[PeriodSpan, ...]:
    """Return multi-year spans starting at birth with the Basic number.

    Each span lasts as many years as its number; numbers then advance
    cyclically until the cursor passes ``horizon_years`` after birth. Near
    the end of the calendar the horizon and the last span stop at
    :data:`datetime.date.max`.
    """

    birth = _parse(dob, "maha")
    if birth is None:
        return ()

    origin = birth.to_date()
    horizon = _years_later(origin, horizon_years)
    number = _basic_root(birth)
    cursor = origin
    spans: list[PeriodSpan] = []
    while cursor < horizon:
        following = _years_later(cursor, number)
        if following == date.max:
            spans.append(PeriodSpan("maha", number, cursor, date.max))
            break
        spans.append(PeriodSpan("maha", number, cursor, following - _ONE_DAY))
        cursor = following
        number = next_number(number)
    return tuple(spans)


def build_yearly_timeline(
    dob: BirthInput,
    from_year: int | None = None,
    to_year: int | None = None,
    horizon_years: int = DEFAULT_HORIZON_YEARS,
) -> tuple[PeriodSpan, ...]:
    """Return one span per birthday-to-birthday year, both bounds inclusive.

    Defaults cover the birth year through ``birth year + horizon_years``.
    """

    birth = _parse(dob, "yearly")
    if birth is None:
        return ()

    first = birth.year if from_year is None else from_year
    last = birth.year + horizon_years if to_year is None else to_year
    return tuple(
        yearly_span(birth, year) for year in range(first, last + 1) if _has_yearly_span(year)
    )


def _duration(durations: Mapping[int, int], number: int) -> int:
    days = durations.get(number)
    if days is None or days <= 0:
        raise ValueError(f"monthly duration for period {number} must be a positive day count")
    return days


def build_monthly_timeline(
    dob: BirthInput, year: int, durations: Mapping[int, int] = MONTHLY_DURATIONS
) -> tuple[PeriodSpan, ...]:
    """Return the monthly spans of the dasha year starting in ``year``.

    The first span carries the yearly number; each span lasts
    ``durations[number]`` days and the last is clipped to the year's end.
    """

    birth = _parse(dob, "monthly")
    if birth is None or not _has_yearly_span(year):
        return ()

    anchor = yearly_span(birth, year)
    number = anchor.period_number
    cursor = anchor.start
    spans: list[PeriodSpan] = []
    while cursor <= anchor.end:
        remaining = (anchor.end - cursor).days
        end = cursor + timedelta(days=min(_duration(durations, number) - 1, remaining))
        spans.append(PeriodSpan("monthly", number, cursor, end, calendar_year=year))
        cursor = spans[-1].next_start()
        number = next_number(number)
    return tuple(spans)


def daily_from_monthly(monthly: Iterable[PeriodSpan]) -> tuple[PeriodSpan, ...]:
    """Split monthly spans into days.

    A day's number reduces its monthly number plus its weekday digit.
    """

    spans: list[PeriodSpan] = []
    for period in monthly:
        day = period.start
        while day <= period.end:
            number = reduce_number(period.period_number + weekday_number(day))
            spans.append(PeriodSpan("daily", number, day, day, calendar_year=period.calendar_year))
            day += _ONE_DAY
    return tuple(spans)


def build_daily_timeline(
    dob: BirthInput, year: int, durations: Mapping[int, int] = MONTHLY_DURATIONS
) -> tuple[PeriodSpan, ...]:
    """Return one span per day of the dasha year starting in ``year``."""

    birth = _parse(dob, "daily")
    if birth is None:
        return ()
    return daily_from_monthly(build_monthly_timeline(birth, year, durations))
