"""Date-of-birth parsing and calendar helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from ..errors import InvalidDateFormat

__all__ = [
    "BirthDate",
    "parse_birth_date",
    "coerce_birth_date",
    "calendar_date",
    "add_years",
]

_DAY_FIRST = re.compile(r"^\s*(\d{1,2})([/-])(\d{1,2})\2(\d{4}|\d{2})\s*$")
_YEAR_FIRST = re.compile(r"^\s*(\d{4})-(\d{1,2})-(\d{1,2})\s*$")


@dataclass(frozen=True)
class BirthDate:
    """Canonical (day, month, year) triple.

    Only the field ranges are checked; day/month combinations that do not
    exist in the given year (``31/04``, ``29/02`` in a common year) are kept
    as entered and rolled forward by :func:`calendar_date` when a real
    calendar day is needed.
    """

    day: int
    month: int
    year: int

    def __post_init__(self) -> None:
        if not 1 <= self.day <= 31:
            raise InvalidDateFormat(self, f"day out of range: {self.day}")
        if not 1 <= self.month <= 12:
            raise InvalidDateFormat(self, f"month out of range: {self.month}")
        if self.year < 1:
            raise InvalidDateFormat(self, f"year out of range: {self.year}")

    def to_date(self) -> date:
        """Return the calendar day this birth date falls on."""

        return calendar_date(self.year, self.month, self.day)

    def digit_string(self) -> str:
        """Return zero-padded day and month followed by the full year."""

        return f"{self.day:02d}{self.month:02d}{self.year}"

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def to_dict(self) -> dict[str, int]:
        return {"day": self.day, "month": self.month, "year": self.year}


def parse_birth_date(value: str) -> BirthDate:
    """Parse ``DD/MM/YYYY``, ``DD-MM-YYYY`` or ``YYYY-MM-DD`` into a :class:`BirthDate`.

    Two-digit years in the day-first layouts are expanded with a ``20``
    prefix. Anything else raises :class:`~karmank.errors.InvalidDateFormat`.
    """

    if not isinstance(value, str):
        raise InvalidDateFormat(value)

    match = _YEAR_FIRST.match(value)
    if match:
        year, month, day = (int(part) for part in match.groups())
        return BirthDate(day=day, month=month, year=year)

    match = _DAY_FIRST.match(value)
    if match:
        day_text, _sep, month_text, year_text = match.groups()
        if len(year_text) == 2:
            year_text = f"20{year_text}"
        return BirthDate(day=int(day_text), month=int(month_text), year=int(year_text))

    raise InvalidDateFormat(value)


def coerce_birth_date(value: BirthDate | date | str) -> BirthDate:
    """Return a :class:`BirthDate` for ``value`` regardless of its input type."""

    if isinstance(value, BirthDate):
        return value
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return BirthDate(day=value.day, month=value.month, year=value.year)
    return parse_birth_date(value)


def calendar_date(year: int, month: int, day: int) -> date:
    """Return ``year-month-day``, rolling overflowing days into the next month."""

    return date(year, month, 1) + timedelta(days=day - 1)


def add_years(moment: date, years: int) -> date:
    """Shift ``moment`` by whole years; 29 February becomes 1 March when needed."""

    return calendar_date(moment.year + years, moment.month, moment.day)
