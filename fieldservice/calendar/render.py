"""
Render assembly: turns placed jobs into the per-cell segments painted by
the calendar views.

A multi-day job produces one segment per day it touches. Only the true
start and end segments get rounded corners, so adjacent cells fuse into a
single bar; the label and percentage badge appear on the start segment only.
"""

from datetime import date, datetime
from typing import Any, Iterable, Optional, Union

from pydantic import BaseModel

from ..config import UNKNOWN_CLIENT_LABEL, WORK_DAY_END_HOUR, WORK_DAY_START_HOUR
from .date_range import as_date, format_period, month_weeks, resolve_dates, shift_anchor
from .placement import (
    CalendarJob,
    DayRole,
    classify_day,
    effective_end,
    jobs_for_day,
    jobs_for_hour,
)
from .progress import progress_percentage

STATUS_COLORS = {
    "scheduled": "blue-600",
    "planned": "blue-600",
    "in_progress": "amber-500",
    "completed": "green-600",
    "cancelled": "red-600",
}
DEFAULT_COLOR = "blue-600"
STRIPE_PATTERN = "stripe"

Z_INDEX = {"start": 10, "single-day": 10, "middle": 8, "end": 5}


class CalendarSegment(BaseModel):
    jobId: int
    parentJobId: Optional[int] = None
    title: str
    clientName: str
    status: str
    role: DayRole
    color: str
    pattern: Optional[str] = None
    isActivity: bool = False
    progressPercentage: int
    startDate: datetime
    endDate: datetime
    roundedLeft: bool
    roundedRight: bool
    showLabel: bool
    zIndex: int
    tooltip: str


class HourSlot(BaseModel):
    hour: int
    segments: list[CalendarSegment]


class CalendarCell(BaseModel):
    date: date
    isCurrentPeriod: bool
    isToday: bool
    segments: list[CalendarSegment]
    hours: list[HourSlot] = []


class CalendarView(BaseModel):
    view: str
    anchor: date
    title: str
    start: date
    end: date
    previousAnchor: date
    nextAnchor: date
    cells: list[CalendarCell]
    weeks: list[list[Optional[date]]] = []


def status_color(status: str, is_activity: bool = False) -> str:
    """Color token for a status; activities use the next darker shade."""
    color = STATUS_COLORS.get(status, DEFAULT_COLOR)
    if is_activity:
        color = color.replace("-600", "-700").replace("-500", "-600")
    return color


def _field(record: Any, name: str) -> Any:
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


def resolve_client_name(
    client_id: Optional[int], clients: Iterable[Any], fallback: str = UNKNOWN_CLIENT_LABEL
) -> str:
    """Display name for a job's client; tolerates an empty or partial client list."""
    if client_id is None:
        return fallback
    for client in clients:
        if _field(client, "id") == client_id:
            return _field(client, "name") or fallback
    return fallback


def build_segment(
    job: CalendarJob,
    role: DayRole,
    client_name: str,
    now: Optional[datetime] = None,
) -> CalendarSegment:
    progress = progress_percentage(job, now)
    opens = role in ("start", "single-day")
    closes = role in ("end", "single-day")
    return CalendarSegment(
        jobId=job.id,
        parentJobId=job.jobId,
        title=job.title,
        clientName=client_name,
        status=job.status,
        role=role,
        color=status_color(job.status, job.isActivity),
        pattern=STRIPE_PATTERN if job.isActivity else None,
        isActivity=job.isActivity,
        progressPercentage=progress,
        startDate=job.startDate,
        endDate=effective_end(job),
        roundedLeft=opens,
        roundedRight=closes,
        showLabel=opens,
        zIndex=Z_INDEX[role],
        tooltip=f"{job.title} - {client_name} ({progress}%)",
    )


def assemble_view(
    jobs: list[CalendarJob],
    clients: Iterable[Any],
    anchor: Union[date, datetime],
    view: str,
    now: Optional[datetime] = None,
    work_hours: tuple[int, int] = (WORK_DAY_START_HOUR, WORK_DAY_END_HOUR),
    unknown_client: str = UNKNOWN_CLIENT_LABEL,
) -> CalendarView:
    """Build the full view model for one calendar page."""
    now = now or datetime.now()
    anchor_day = as_date(anchor)
    clients = list(clients)
    # Activities and jobs come from separate tables, so ids may collide
    names = {id(job): resolve_client_name(job.clientId, clients, unknown_client) for job in jobs}
    first_hour, last_hour = work_hours

    cells = []
    dates = resolve_dates(anchor_day, view)
    for day in dates:
        segments = [
            build_segment(job, role, names[id(job)], now) for job, role in jobs_for_day(jobs, day)
        ]
        hours = []
        if view in ("day", "week"):
            for hour in range(first_hour, last_hour + 1):
                slot_segments = []
                for job in jobs_for_hour(jobs, day, hour):
                    role = classify_day(job, day)
                    slot_segments.append(build_segment(job, role, names[id(job)], now))
                hours.append(HourSlot(hour=hour, segments=slot_segments))

        is_current = day.month == anchor_day.month if view == "month" else True
        cells.append(
            CalendarCell(
                date=day,
                isCurrentPeriod=is_current,
                isToday=day == now.date(),
                segments=segments,
                hours=hours,
            )
        )

    return CalendarView(
        view=view,
        anchor=anchor_day,
        title=format_period(anchor_day, view),
        start=dates[0],
        end=dates[-1],
        previousAnchor=shift_anchor(anchor_day, view, -1),
        nextAnchor=shift_anchor(anchor_day, view, 1),
        cells=cells,
        weeks=month_weeks(anchor_day) if view == "month" else [],
    )
