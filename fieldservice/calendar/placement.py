"""
Job placement on calendar days.

Every job resolves to a closed ``[start, effective_end]`` interval. A job
is placed on a day when the day falls between the interval's start and
end dates (time of day ignored), and each placed day gets a role so that
multi-day jobs render as one continuous bar.
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from .date_range import as_date

logger = logging.getLogger(__name__)

DayRole = Literal["start", "end", "middle", "single-day"]

END_OF_DAY = time(23, 59, 59)


class JobDataError(ValueError):
    """Raised when a job record cannot be placed (missing or unparseable start)"""


def to_local_naive(value: datetime) -> datetime:
    """Aware datetimes are converted to local wall-clock time; naive ones are kept."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


class CalendarJob(BaseModel):
    """Placement input: a job or a job activity with its scheduling fields"""

    model_config = ConfigDict(extra="ignore")

    id: int
    title: str = ""
    clientId: Optional[int] = None
    jobId: Optional[int] = None  # Parent job, set for activities
    status: str = "scheduled"
    startDate: datetime
    endDate: Optional[datetime] = None
    duration: Optional[float] = None  # Hours
    isActivity: bool = False
    location: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def derive_activity_flag(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("activityId") is not None and "isActivity" not in data:
            data = {**data, "isActivity": True}
        return data

    @field_validator("startDate", "endDate")
    @classmethod
    def normalize_timezone(cls, v):
        if v is None:
            return v
        return to_local_naive(v)

    @field_validator("status")
    @classmethod
    def normalize_status(cls, v):
        # "planned" is the legacy spelling of "scheduled"
        if v == "planned":
            return "scheduled"
        return v


def parse_job(record: Union[dict, CalendarJob]) -> CalendarJob:
    """Validate a raw job record, failing fast on a missing or malformed startDate."""
    if isinstance(record, CalendarJob):
        return record
    try:
        return CalendarJob.model_validate(record)
    except ValidationError as e:
        raise JobDataError(f"Invalid job record {record.get('id', '?')}: {e}") from e


def parse_jobs(records: list[dict]) -> list[CalendarJob]:
    """Parse a job list, dropping (and logging) records that cannot be placed."""
    jobs = []
    for record in records:
        try:
            jobs.append(parse_job(record))
        except JobDataError as e:
            logger.warning(f"Skipping job: {e}")
    return jobs


def effective_end(job: CalendarJob) -> datetime:
    """
    Resolved end instant of a job:
    endDate if present, else start + duration hours, else 23:59:59 of the start day.

    A record whose end precedes its start collapses to its start instant.
    """
    start = job.startDate
    if job.endDate is not None:
        end = job.endDate
    elif job.duration:
        end = start + timedelta(hours=job.duration)
    else:
        end = datetime.combine(start.date(), END_OF_DAY)

    if end < start:
        logger.warning(f"Job {job.id} ends before it starts, placing it on its start day only")
        return start
    return end


def date_span(job: CalendarJob) -> tuple[date, date]:
    return job.startDate.date(), effective_end(job).date()


def is_placed_on(job: CalendarJob, day: Union[date, datetime]) -> bool:
    first, last = date_span(job)
    return first <= as_date(day) <= last


def overlaps_range(job: CalendarJob, first: Union[date, datetime], last: Union[date, datetime]) -> bool:
    """True when the job is placed on at least one day of ``[first, last]``."""
    job_first, job_last = date_span(job)
    return job_first <= as_date(last) and job_last >= as_date(first)


def classify_day(job: CalendarJob, day: Union[date, datetime]) -> Optional[DayRole]:
    """Role of the day within the job's span, or None when the job is not on that day."""
    first, last = date_span(job)
    target = as_date(day)
    if not first <= target <= last:
        return None

    is_start = target == first
    is_end = target == last
    if is_start and is_end:
        return "single-day"
    if is_start:
        return "start"
    if is_end:
        return "end"
    return "middle"


def jobs_for_day(jobs: list[CalendarJob], day: Union[date, datetime]) -> list[tuple[CalendarJob, DayRole]]:
    """Jobs visible on a day with their roles, ordered by start then id."""
    placed = []
    for job in sorted(jobs, key=lambda j: (j.startDate, j.id)):
        role = classify_day(job, day)
        if role is not None:
            placed.append((job, role))
    return placed


def jobs_for_hour(jobs: list[CalendarJob], day: Union[date, datetime], hour: int) -> list[CalendarJob]:
    """Jobs whose interval contains the instant ``day hour:00`` (hourly day/week rows)."""
    instant = datetime.combine(as_date(day), time(hour))
    return [
        job
        for job in sorted(jobs, key=lambda j: (j.startDate, j.id))
        if job.startDate <= instant <= effective_end(job)
    ]
