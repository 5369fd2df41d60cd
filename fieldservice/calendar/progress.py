"""Progress Calculator: how far along a job is, as a whole percentage."""

import math
from datetime import datetime
from typing import Optional

from .placement import CalendarJob, effective_end


def progress_percentage(job: CalendarJob, now: Optional[datetime] = None) -> int:
    """
    Completion percentage (0-100) used to fill a job's progress bar.

    Completed jobs are always 100 and cancelled jobs 0. Otherwise progress
    is the elapsed share of [start, effective end]: 0 before the start,
    100 once the end has passed even if the status was never updated.
    """
    if job.status == "completed":
        return 100
    if job.status == "cancelled":
        return 0

    now = now or datetime.now()
    start = job.startDate
    end = effective_end(job)

    if now < start:
        return 0
    if now > end or end == start:
        return 100

    elapsed = (now - start) / (end - start) * 100
    value = min(max(elapsed, 0.0), 100.0)
    # Round half up, as the bars are labelled with whole percentages
    return int(math.floor(value + 0.5))
