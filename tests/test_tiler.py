from datetime import date, timedelta

import pytest

from karmank.dasha.tiler import (
    MONTHLY_DURATIONS,
    build_daily_timeline,
    build_maha_timeline,
    build_monthly_timeline,
    build_yearly_timeline,
    weekday_number,
)


def test_weekday_digits_follow_custom_table() -> None:
    # 2024-04-21 is a Sunday.
    sunday = date(2024, 4, 21)
    digits = [weekday_number(sunday + timedelta(days=offset)) for offset in range(7)]
    assert digits == [1, 2, 9, 5, 3, 6, 8]


def test_maha_timeline_starts_with_basic_number(birth) -> None:
    maha = build_maha_timeline(birth)
    first, second, third = maha[:3]
    assert (first.period_number, first.start, first.end) == (4, date(1987, 4, 22), date(1991, 4, 21))
    assert (second.period_number, second.start, second.end) == (5, date(1991, 4, 22), date(1996, 4, 21))
    assert third.period_number == 6


def test_maha_timeline_stops_at_horizon(birth) -> None:
    maha = build_maha_timeline(birth)
    assert len(maha) == 23
    assert maha[-1].period_number == 8
    assert maha[-1].end == date(2107, 4, 21)
    assert [span.period_number for span in maha[5:8]] == [9, 1, 2]


def test_yearly_numbers_are_recomputed_each_year(birth) -> None:
    yearly = build_yearly_timeline(birth)
    assert len(yearly) == 121
    first = yearly[0]
    assert (first.period_number, first.start, first.end) == (1, date(1987, 4, 22), date(1988, 4, 21))
    year_2024 = next(span for span in yearly if span.calendar_year == 2024)
    assert year_2024.period_number == 7
    assert year_2024.end == date(2025, 4, 21)


def test_yearly_range_can_be_narrowed(birth) -> None:
    spans = build_yearly_timeline(birth, from_year=2020, to_year=2022)
    assert [span.calendar_year for span in spans] == [2020, 2021, 2022]


def test_monthly_spans_follow_duration_table(birth) -> None:
    monthly = build_monthly_timeline(birth, 2024)
    assert (monthly[0].period_number, monthly[0].start, monthly[0].end) == (
        7,
        date(2024, 4, 22),
        date(2024, 6, 17),
    )
    assert (monthly[1].period_number, monthly[1].start, monthly[1].end) == (
        8,
        date(2024, 6, 18),
        date(2024, 8, 20),
    )
    assert [span.period_number for span in monthly] == [7, 8, 9, 1, 2, 3, 4, 5, 6]
    assert all(span.duration_days == MONTHLY_DURATIONS[span.period_number] for span in monthly)
    assert monthly[-1].end == date(2025, 4, 21)


def test_monthly_final_span_is_clipped_in_leap_years(birth) -> None:
    monthly = build_monthly_timeline(birth, 1987)
    assert len(monthly) == 10
    last = monthly[-1]
    assert (last.period_number, last.duration_days) == (1, 1)
    assert last.start == last.end == date(1988, 4, 21)


def test_monthly_rejects_non_positive_durations(birth) -> None:
    durations = {**MONTHLY_DURATIONS, 7: 0}
    with pytest.raises(ValueError):
        build_monthly_timeline(birth, 2024, durations)


def test_daily_numbers_overlay_weekday_digit(birth) -> None:
    daily = build_daily_timeline(birth, 2024)
    assert len(daily) == 365
    assert daily[0].start == daily[0].end == date(2024, 4, 22)
    # Monday: 7 + 2 = 9; Tuesday: 7 + 9 = 16 -> 7.
    assert [span.period_number for span in daily[:2]] == [9, 7]
    assert daily[-1].end == date(2025, 4, 21)


def test_leap_day_birth_rolls_into_march() -> None:
    yearly = build_yearly_timeline("29/02/2000", from_year=2000, to_year=2002)
    assert [span.start for span in yearly] == [date(2000, 2, 29), date(2001, 3, 1), date(2002, 3, 1)]
    assert yearly[0].end == date(2001, 2, 28)


@pytest.mark.parametrize(
    "builder",
    [
        lambda dob: build_maha_timeline(dob),
        lambda dob: build_yearly_timeline(dob),
        lambda dob: build_monthly_timeline(dob, 2024),
        lambda dob: build_daily_timeline(dob, 2024),
    ],
)
def test_unparseable_birth_yields_empty_timelines(builder) -> None:
    assert builder("not a date") == ()


def test_timelines_stop_at_the_last_representable_day() -> None:
    maha = build_maha_timeline("01/01/9950")
    assert maha[-1].period_number == 3
    assert (maha[-1].start, maha[-1].end) == (date(9998, 1, 1), date.max)
    assert all(a.next_start() == b.start for a, b in zip(maha, maha[1:]))

    yearly = build_yearly_timeline("01/01/9950")
    assert yearly[0].calendar_year == 9950
    assert yearly[-1].calendar_year == 9998

    assert build_monthly_timeline("01/01/9950", 9999) == ()
    assert build_daily_timeline("01/01/9950", 9999) == ()
    assert build_daily_timeline("01/01/9950", 9998)[-1].end == date(9998, 12, 31)


def test_monthly_table_is_read_only() -> None:
    with pytest.raises(TypeError):
        MONTHLY_DURATIONS[1] = 9  # type: ignore[index]
