"""Data structures for dasha period timelines."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

__all__ = ["LEVELS", "VIEWS", "PeriodSpan", "ActiveLayers", "as_date"]

LEVELS: tuple[str, ...] = ("maha", "yearly", "monthly", "daily")
# A view exposes its own level and every coarser one.
VIEWS: tuple[str, ...] = LEVELS


def as_date(moment: date | datetime) -> date:
    return moment.date() if isinstance(moment, datetime) else moment


@dataclass(frozen=True)
class PeriodSpan:
    """One numbered period; ``start`` and ``end`` are both inclusive days."""

    level: str
    period_number: int
    start: date
    end: date
    calendar_year: int | None = None

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(f"{self.level} span ends before it starts: {self.start} > {self.end}")

    def contains(self, moment: date | datetime) -> bool:
        """Return ``True`` when ``moment`` falls on a day inside the span."""

        return self.start <= as_date(moment) <= self.end

    @property
    def start_at(self) -> datetime:
        return datetime.combine(self.start, time.min)

    @property
    def end_at(self) -> datetime:
        """Last instant of the final day."""

        return datetime.combine(self.end, time.max)

    @property
    def duration_days(self) -> int:
        return (self.end - self.start).days + 1

    def next_start(self) -> date:
        return self.end + timedelta(days=1)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "level": self.level,
            "period_number": self.period_number,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
        }
        if self.calendar_year is not None:
            payload["calendar_year"] = self.calendar_year
        return payload


def _span_dict(span: PeriodSpan | None) -> dict[str, object] | None:
    return span.to_dict() if span is not None else None


@dataclass(frozen=True)
class ActiveLayers:
    """Spans containing ``moment``, one per timeline level."""

    moment: date
    maha: PeriodSpan | None = None
    yearly: PeriodSpan | None = None
    monthly: PeriodSpan | None = None
    daily: PeriodSpan | None = None

    def spans(self, view: str = "daily") -> list[PeriodSpan]:
        """Return the active spans visible in ``view``, coarsest first."""

        if view not in VIEWS:
            raise ValueError(f"unknown view {view!r}; expected one of {', '.join(VIEWS)}")
        visible = LEVELS[: LEVELS.index(view) + 1]
        found = (getattr(self, level) for level in visible)
        return [span for span in found if span is not None]

    def numbers(self, view: str = "daily") -> dict[str, int]:
        """Return ``{level: period_number}`` for the layers active in ``view``."""

        return {span.level: span.period_number for span in self.spans(view)}

    def to_dict(self) -> dict[str, object]:
        return {
            "moment": self.moment.isoformat(),
            "layers": {level: _span_dict(getattr(self, level)) for level in LEVELS},
        }
