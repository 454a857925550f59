from __future__ import annotations

from datetime import date, timedelta

import pytest

from karmank.dasha.lookup import find_active
from karmank.dasha.tiler import (
    MONTHLY_DURATIONS,
    build_daily_timeline,
    build_maha_timeline,
    build_monthly_timeline,
    build_yearly_timeline,
    yearly_span,
)
from karmank.numerology.core import core_numbers
from karmank.numerology.dates import coerce_birth_date
from karmank.numerology.grid import DigitHistogram, PlaneStatus, build_grid, plane_status
from karmank.numerology.reduction import next_number, reduce_number

hypothesis = pytest.importorskip("hypothesis")
given = hypothesis.given
st = hypothesis.strategies
settings = hypothesis.settings

BIRTHS = st.dates(min_value=date(1900, 1, 1), max_value=date(2100, 12, 31))
OFFSETS = st.integers(min_value=0, max_value=40)


def _assert_contiguous(spans) -> None:
    for previous, current in zip(spans, spans[1:]):
        assert current.start == previous.end + timedelta(days=1)
        assert previous.start <= previous.end


@given(n=st.integers(min_value=1, max_value=10**12))
def test_reduction_is_a_fixed_point(n: int) -> None:
    reduced = reduce_number(n)
    assert 1 <= reduced <= 9
    assert reduce_number(reduced) == reduced


@given(n=st.integers(min_value=1, max_value=9))
def test_next_number_returns_after_nine_steps(n: int) -> None:
    value = n
    for _ in range(9):
        value = next_number(value)
    assert value == n


@given(birth=BIRTHS)
def test_core_numbers_in_range(birth: date) -> None:
    numbers = core_numbers(birth)
    assert 1 <= numbers.basic <= 9
    assert 1 <= numbers.destiny <= 9


@given(birth=BIRTHS)
def test_base_histogram_counts_nonzero_digits(birth: date) -> None:
    grid = build_grid(birth)
    digits = f"{birth.day:02d}{birth.month:02d}{birth.year}"
    assert grid.base.total() == sum(1 for ch in digits if ch != "0")


@given(counts=st.lists(st.integers(min_value=0, max_value=3), min_size=9, max_size=9))
def test_plane_status_tracks_presence(counts: list[int]) -> None:
    histogram = DigitHistogram(tuple(counts))
    for triad in ((1, 4, 7), (3, 6, 9), (2, 5, 8)):
        present = sum(1 for digit in triad if histogram[digit] > 0)
        expected = [PlaneStatus.MISSING, PlaneStatus.WEAK, PlaneStatus.BALANCED, PlaneStatus.STRONG]
        assert plane_status(histogram, triad) is expected[present]


@settings(deadline=None, max_examples=40)
@given(birth=BIRTHS)
def test_maha_and_yearly_are_contiguous(birth: date) -> None:
    maha = build_maha_timeline(birth)
    yearly = build_yearly_timeline(birth)
    _assert_contiguous(maha)
    _assert_contiguous(yearly)
    assert maha[0].start == yearly[0].start == coerce_birth_date(birth).to_date()


@settings(deadline=None, max_examples=40)
@given(birth=BIRTHS, offset=OFFSETS)
def test_monthly_durations_and_clipping(birth: date, offset: int) -> None:
    year = birth.year + offset
    anchor = yearly_span(coerce_birth_date(birth), year)
    monthly = build_monthly_timeline(birth, year)
    _assert_contiguous(monthly)
    assert monthly[0].start == anchor.start
    assert monthly[0].period_number == anchor.period_number
    assert monthly[-1].end == anchor.end
    for span in monthly[:-1]:
        assert span.duration_days == MONTHLY_DURATIONS[span.period_number]
    assert 1 <= monthly[-1].duration_days <= MONTHLY_DURATIONS[monthly[-1].period_number]


@settings(deadline=None, max_examples=20)
@given(birth=BIRTHS, offset=OFFSETS)
def test_daily_covers_the_year(birth: date, offset: int) -> None:
    year = birth.year + offset
    daily = build_daily_timeline(birth, year)
    anchor = yearly_span(coerce_birth_date(birth), year)
    _assert_contiguous(daily)
    assert len(daily) == anchor.duration_days
    assert all(1 <= span.period_number <= 9 for span in daily)


@settings(deadline=None, max_examples=40)
@given(birth=BIRTHS, days=st.integers(min_value=0, max_value=365 * 110))
def test_lookup_returns_unique_containing_span(birth: date, days: int) -> None:
    target = coerce_birth_date(birth).to_date() + timedelta(days=days)
    for timeline in (build_maha_timeline(birth), build_yearly_timeline(birth)):
        found = find_active(timeline, target)
        assert found is not None and found.contains(target)
        assert sum(1 for span in timeline if span.contains(target)) == 1
