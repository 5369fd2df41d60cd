from datetime import date, datetime, timedelta

import pytest

from fieldservice.calendar.date_range import (
    format_period,
    month_weeks,
    resolve_dates,
    shift_anchor,
    visible_interval,
)


def test_day_view_is_the_anchor_only():
    assert resolve_dates(datetime(2025, 3, 12, 15, 30), "day") == [date(2025, 3, 12)]


@pytest.mark.parametrize("offset", range(0, 400, 13))
def test_week_view_is_seven_consecutive_days_from_monday(offset):
    anchor = date(2024, 1, 1) + timedelta(days=offset)
    days = resolve_dates(anchor, "week")

    assert len(days) == 7
    assert days[0].weekday() == 0
    assert all(b - a == timedelta(days=1) for a, b in zip(days, days[1:]))
    assert days[0] <= anchor <= days[-1]


def test_week_view_on_sunday_belongs_to_previous_monday():
    days = resolve_dates(date(2025, 3, 16), "week")
    assert days[0] == date(2025, 3, 10)
    assert days[-1] == date(2025, 3, 16)


def test_month_view_pads_previous_month_but_not_next():
    # March 2025 starts on a Saturday and ends on a Monday
    days = resolve_dates(date(2025, 3, 20), "month")

    assert days[0] == date(2025, 2, 24)
    assert days[-1] == date(2025, 3, 31)
    assert all(d.month in (2, 3) for d in days)


def test_month_starting_on_monday_has_no_padding():
    days = resolve_dates(date(2025, 9, 5), "month")
    assert days[0] == date(2025, 9, 1)
    assert days[-1] == date(2025, 9, 30)
    assert len(days) == 30


def test_month_weeks_pad_only_the_last_row():
    weeks = month_weeks(date(2025, 3, 1))

    assert all(len(row) == 7 for row in weeks)
    assert weeks[0][0] == date(2025, 2, 24)
    last_row = weeks[-1]
    assert last_row[0] == date(2025, 3, 31)
    assert last_row[1:] == [None] * 6
    # No filler week made only of next-month days
    assert len(weeks) == 6


def test_month_weeks_without_trailing_padding():
    # February 2021: Monday 1st to Sunday 28th, exactly four rows
    weeks = month_weeks(date(2021, 2, 10))
    assert len(weeks) == 4
    assert None not in weeks[-1]


def test_visible_interval():
    assert visible_interval(date(2025, 3, 12), "week") == (date(2025, 3, 10), date(2025, 3, 16))


def test_navigation_steps():
    anchor = date(2025, 3, 12)
    assert shift_anchor(anchor, "day", 1) == date(2025, 3, 13)
    assert shift_anchor(anchor, "day", -1) == date(2025, 3, 11)
    assert shift_anchor(anchor, "week", 1) == date(2025, 3, 19)
    assert shift_anchor(anchor, "week", -1) == date(2025, 3, 5)
    assert shift_anchor(anchor, "month", 1) == date(2025, 4, 12)
    assert shift_anchor(anchor, "month", -1) == date(2025, 2, 12)


def test_month_navigation_clamps_day_of_month():
    assert shift_anchor(date(2025, 1, 31), "month", 1) == date(2025, 2, 28)
    assert shift_anchor(date(2024, 3, 31), "month", -1) == date(2024, 2, 29)
    assert shift_anchor(date(2024, 12, 15), "month", 1) == date(2025, 1, 15)


def test_unknown_view_is_rejected():
    with pytest.raises(ValueError):
        resolve_dates(date(2025, 3, 12), "year")


def test_period_titles():
    assert format_period(date(2025, 3, 12), "month") == "March 2025"
    assert format_period(date(2025, 3, 12), "week") == "10 - 16 March 2025"
    assert format_period(date(2025, 4, 30), "week") == "28 Apr - 4 May 2025"
    assert format_period(date(2024, 12, 31), "week") == "30 Dec 2024 - 5 Jan 2025"
    assert format_period(date(2025, 3, 10), "day") == "Monday 10 March 2025"
