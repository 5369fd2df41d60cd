"""
Date-range resolution for the day / week / month calendar views.

Weeks always start on Monday. Month grids include the leading days of
the previous month needed to complete the first week, but never the
trailing days of the next month: the last row is padded with ``None``.
"""

import calendar
from datetime import date, datetime, timedelta
from typing import Literal, Optional, Union

ViewMode = Literal["day", "week", "month"]
VIEW_MODES = ("day", "week", "month")

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def as_date(value: Union[date, datetime]) -> date:
    """Strip the time of day from a datetime; plain dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def validate_view(view: str) -> str:
    if view not in VIEW_MODES:
        raise ValueError(f"Unknown calendar view '{view}', expected one of {', '.join(VIEW_MODES)}")
    return view


def week_start(anchor: Union[date, datetime]) -> date:
    """Monday on or before the anchor"""
    day = as_date(anchor)
    return day - timedelta(days=day.weekday())


def month_bounds(anchor: Union[date, datetime]) -> tuple[date, date]:
    day = as_date(anchor)
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last)


def resolve_dates(anchor: Union[date, datetime], view: str) -> list[date]:
    """
    Ordered list of the calendar days rendered for a view.

    - day: just the anchor
    - week: the 7 days of the anchor's Monday-based week
    - month: Monday on/before the 1st through the last day of the month
    """
    validate_view(view)
    day = as_date(anchor)

    if view == "day":
        return [day]

    if view == "week":
        first = week_start(day)
        return [first + timedelta(days=offset) for offset in range(7)]

    first_of_month, last_of_month = month_bounds(day)
    first = week_start(first_of_month)
    total = (last_of_month - first).days + 1
    return [first + timedelta(days=offset) for offset in range(total)]


def month_weeks(anchor: Union[date, datetime]) -> list[list[Optional[date]]]:
    """Group the month view into rows of 7, padding only the last row with None."""
    days: list[Optional[date]] = list(resolve_dates(anchor, "month"))
    weeks = []
    for index in range(0, len(days), 7):
        row = days[index : index + 7]
        row.extend([None] * (7 - len(row)))
        weeks.append(row)
    return weeks


def visible_interval(anchor: Union[date, datetime], view: str) -> tuple[date, date]:
    dates = resolve_dates(anchor, view)
    return dates[0], dates[-1]


def add_months(day: date, months: int) -> date:
    """Shift by whole months, clamping the day to the target month's length."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last))


def shift_anchor(anchor: Union[date, datetime], view: str, step: int = 1) -> date:
    """Previous (step=-1) / next (step=1) navigation for the given view."""
    validate_view(view)
    day = as_date(anchor)
    if view == "day":
        return day + timedelta(days=step)
    if view == "week":
        return day + timedelta(days=7 * step)
    return add_months(day, step)


def format_period(anchor: Union[date, datetime], view: str) -> str:
    """Header title for the visible period."""
    validate_view(view)
    day = as_date(anchor)

    if view == "month":
        return f"{MONTH_NAMES[day.month - 1]} {day.year}"

    if view == "day":
        return f"{DAY_NAMES[day.weekday()]} {day.day} {MONTH_NAMES[day.month - 1]} {day.year}"

    first = week_start(day)
    last = first + timedelta(days=6)
    if first.month == last.month:
        return f"{first.day} - {last.day} {MONTH_NAMES[last.month - 1]} {last.year}"
    if first.year == last.year:
        return (
            f"{first.day} {MONTH_NAMES[first.month - 1][:3]} - "
            f"{last.day} {MONTH_NAMES[last.month - 1][:3]} {last.year}"
        )
    return (
        f"{first.day} {MONTH_NAMES[first.month - 1][:3]} {first.year} - "
        f"{last.day} {MONTH_NAMES[last.month - 1][:3]} {last.year}"
    )
