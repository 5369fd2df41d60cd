"""Calendar core: date ranges, job placement, progress and view assembly."""

from .date_range import (
    VIEW_MODES,
    format_period,
    month_weeks,
    resolve_dates,
    shift_anchor,
    visible_interval,
)
from .placement import (
    CalendarJob,
    JobDataError,
    classify_day,
    effective_end,
    jobs_for_day,
    jobs_for_hour,
    overlaps_range,
    parse_job,
    parse_jobs,
)
from .progress import progress_percentage
from .render import CalendarCell, CalendarSegment, CalendarView, assemble_view

__all__ = [
    "VIEW_MODES",
    "CalendarCell",
    "CalendarJob",
    "CalendarSegment",
    "CalendarView",
    "JobDataError",
    "assemble_view",
    "classify_day",
    "effective_end",
    "format_period",
    "jobs_for_day",
    "jobs_for_hour",
    "month_weeks",
    "overlaps_range",
    "parse_job",
    "parse_jobs",
    "progress_percentage",
    "resolve_dates",
    "shift_anchor",
    "visible_interval",
]
