"""Dashboard service - headline numbers for the home screen"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...auth import require_permission
from ...calendar import jobs_for_day
from ...calendar.date_range import month_bounds
from ...models import Client, Job
from ...permissions import PermissionSet
from ..jobs.repository import JobRepository
from ..jobs.service import JobService, job_to_calendar_item

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = ("scheduled", "in_progress")


def monthly_income(jobs: list[Job], now: datetime) -> float:
    """Labor plus materials of the completed jobs starting in the current month"""
    first, last = month_bounds(now)
    total = 0.0
    for job in jobs:
        if job.status != "completed" or not first <= job.start_date.date() <= last:
            continue
        total += (job.hourly_rate or 0) * (job.duration or 0) + (job.materials_cost or 0)
    return round(total, 2)


class DashboardService:
    def __init__(self, db: Session, permissions: PermissionSet, now: Optional[datetime] = None):
        self.db = db
        self.permissions = permissions
        self.now = now
        self.jobs = JobService(db, permissions, now)

    def get_stats(self) -> dict:
        require_permission(self.permissions, "canViewJobs")
        now = self.now or datetime.now()
        jobs = JobRepository.get_jobs(self.db)

        stats = {
            "activeJobs": sum(1 for j in jobs if j.status in ACTIVE_STATUSES),
            "completedJobs": sum(1 for j in jobs if j.status == "completed"),
        }
        if self.permissions.canViewClients:
            stats["totalClients"] = self.db.query(Client).count()
        if self.permissions.canViewJobFinancials:
            stats["monthlyIncome"] = monthly_income(jobs, now)

        # Jobs running today, including multi-day jobs that started earlier
        by_id = {j.id: j for j in jobs}
        today_jobs = []
        for item, role in jobs_for_day([job_to_calendar_item(j) for j in jobs], now.date()):
            data = self.jobs.with_client(by_id[item.id])
            data["dayRole"] = role
            today_jobs.append(data)

        logger.debug(f"Dashboard: {stats['activeJobs']} active, {len(today_jobs)} today")
        return {"stats": stats, "todayJobs": today_jobs}
