"""Job service - Business logic for job operations"""

import logging
from datetime import date, datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...auth import require_permission
from ...calendar import CalendarJob, effective_end, overlaps_range, progress_percentage
from ...calendar.placement import END_OF_DAY
from ...calendar.render import resolve_client_name
from ...config import UNKNOWN_CLIENT_LABEL
from ...models import Client, Job, JobActivity
from ...permissions import PermissionSet, filter_job_data
from .repository import JobRepository
from .schemas import JobComplete, JobCreate, JobResponse, JobUpdate

logger = logging.getLogger(__name__)

# API field name -> model attribute
FIELD_MAP = {
    "title": "title",
    "clientId": "client_id",
    "type": "type",
    "status": "status",
    "startDate": "start_date",
    "endDate": "end_date",
    "duration": "duration",
    "hourlyRate": "hourly_rate",
    "materialsCost": "materials_cost",
    "cost": "cost",
    "laborCost": "labor_cost",
    "location": "location",
    "notes": "notes",
    "assignedUserId": "assigned_user_id",
    "photos": "photos",
}

PRICING_FIELDS = ("duration", "hourly_rate", "materials_cost")


def compute_costs(
    hourly_rate: float,
    duration: float,
    materials_cost: float,
    labor_cost: Optional[float] = None,
    cost: Optional[float] = None,
) -> tuple[float, float]:
    """Labor defaults to rate x hours, total cost to labor + materials."""
    if labor_cost is None:
        labor_cost = round(hourly_rate * duration, 2)
    if cost is None:
        cost = round(labor_cost + materials_cost, 2)
    return labor_cost, cost


def job_to_calendar_item(job: Job) -> CalendarJob:
    return CalendarJob(
        id=job.id,
        title=job.title,
        clientId=job.client_id,
        status=job.status,
        startDate=job.start_date,
        endDate=job.end_date,
        duration=job.duration,
        location=job.location,
    )


def job_activity_to_calendar_item(job_activity: JobActivity) -> CalendarJob:
    job = job_activity.job
    name = job_activity.activity.name if job_activity.activity else "Activity"
    return CalendarJob(
        id=job_activity.id,
        jobId=job.id,
        title=f"{name} - {job.title}",
        clientId=job.client_id,
        status=job_activity.status,
        startDate=job_activity.start_date,
        duration=job_activity.duration,
        location=job.location,
        isActivity=True,
    )


class JobService:
    """Service layer for job business logic"""

    def __init__(self, db: Session, permissions: PermissionSet, now: Optional[datetime] = None):
        self.db = db
        self.permissions = permissions
        self.now = now
        self.repo = JobRepository()

    def serialize(self, job: Job) -> JobResponse:
        item = job_to_calendar_item(job)
        clients = [job.client] if job.client else []
        return JobResponse(
            id=job.id,
            title=job.title,
            clientId=job.client_id,
            clientName=resolve_client_name(job.client_id, clients, UNKNOWN_CLIENT_LABEL),
            type=job.type,
            status=job.status,
            startDate=job.start_date,
            endDate=job.end_date,
            effectiveEndDate=effective_end(item),
            duration=job.duration,
            hourlyRate=job.hourly_rate,
            materialsCost=job.materials_cost,
            cost=job.cost,
            laborCost=job.labor_cost,
            location=job.location,
            notes=job.notes,
            assignedUserId=job.assigned_user_id,
            createdAt=job.created_at,
            completedDate=job.completed_date,
            actualDuration=job.actual_duration,
            photos=job.photos or [],
            progressPercentage=progress_percentage(item, self.now),
        )

    def project(self, job: Job) -> dict:
        """Job as the caller is allowed to see it"""
        return filter_job_data(self.permissions, self.serialize(job).model_dump(mode="json"))

    def get_job_or_404(self, job_id: int) -> Job:
        job = self.repo.get_job_by_id(self.db, job_id)
        if not job:
            raise HTTPException(status_code=404, detail="Job not found")
        return job

    def _check_client(self, client_id: int) -> None:
        if not self.db.query(Client.id).filter(Client.id == client_id).first():
            raise HTTPException(status_code=400, detail=f"Client {client_id} does not exist")

    def get_jobs(
        self,
        status: Optional[str] = None,
        client_id: Optional[int] = None,
        assigned_user_id: Optional[int] = None,
    ) -> list[dict]:
        require_permission(self.permissions, "canViewJobs")
        jobs = self.repo.get_jobs(
            self.db, status=status, client_id=client_id, assigned_user_id=assigned_user_id
        )
        return [self.project(j) for j in jobs]

    def get_job(self, job_id: int) -> dict:
        require_permission(self.permissions, "canViewJobs")
        return self.project(self.get_job_or_404(job_id))

    def create_job(self, data: JobCreate, assigned_user_id: Optional[int] = None) -> dict:
        require_permission(self.permissions, "canCreateJobs")
        self._check_client(data.clientId)

        values = {FIELD_MAP[k]: v for k, v in data.model_dump().items()}
        values["labor_cost"], values["cost"] = compute_costs(
            data.hourlyRate, data.duration, data.materialsCost, data.laborCost, data.cost
        )
        if values["assigned_user_id"] is None:
            values["assigned_user_id"] = assigned_user_id

        job = self.repo.create_job(self.db, **values)
        logger.info(f"Created job {job.id} '{job.title}' starting {job.start_date}")
        return self.project(job)

    def update_job(self, job_id: int, data: JobUpdate) -> dict:
        require_permission(self.permissions, "canEditJobs")
        job = self.get_job_or_404(job_id)
        updates = {FIELD_MAP[k]: v for k, v in data.model_dump(exclude_unset=True).items()}

        if "status" in updates and updates["status"] != job.status:
            require_permission(self.permissions, "canUpdateJobStatus")
        if updates.get("client_id") is not None:
            self._check_client(updates["client_id"])

        start = updates.get("start_date") or job.start_date
        end = updates["end_date"] if "end_date" in updates else job.end_date
        if end is not None and end < start:
            raise HTTPException(status_code=400, detail="endDate must not be earlier than startDate")

        if any(updates.get(f) is not None for f in PRICING_FIELDS):
            current = {
                f: updates[f] if updates.get(f) is not None else getattr(job, f)
                for f in PRICING_FIELDS
            }
            updates["labor_cost"], updates["cost"] = compute_costs(
                current["hourly_rate"],
                current["duration"],
                current["materials_cost"],
                updates.get("labor_cost"),
                updates.get("cost"),
            )

        return self.project(self.repo.update_job(self.db, job, **updates))

    def complete_job(self, job_id: int, data: JobComplete) -> dict:
        require_permission(self.permissions, "canUpdateJobStatus")
        job = self.get_job_or_404(job_id)
        if job.status == "cancelled":
            raise HTTPException(status_code=400, detail="Cancelled jobs cannot be completed")

        updates = {
            "status": "completed",
            "completed_date": data.completedDate,
            "actual_duration": data.actualDuration,
            "notes": data.notes if data.notes is not None else job.notes,
        }
        if data.photos:
            updates["photos"] = data.photos
        job = self.repo.update_job(self.db, job, **updates)
        logger.info(f"Job {job.id} completed ({data.actualDuration}h)")
        return self.project(job)

    def delete_job(self, job_id: int) -> dict:
        require_permission(self.permissions, "canDeleteJobs")
        job = self.get_job_or_404(job_id)
        self.repo.delete_job(self.db, job)
        logger.info(f"Deleted job {job_id}")
        return {"message": "Job deleted"}

    def calendar_items(
        self, first: Optional[date] = None, last: Optional[date] = None
    ) -> list[CalendarJob]:
        """
        Jobs and their scheduled activities, as calendar placement input.

        With ``first``/``last`` only items placed on at least one day of that
        range are returned. The database narrows on start date; the end is
        resolved in Python since it may come from the duration.
        """
        require_permission(self.permissions, "canViewJobs")
        start_before = datetime.combine(last, END_OF_DAY) if last is not None else None
        items = [
            job_to_calendar_item(j) for j in self.repo.get_jobs(self.db, start_before=start_before)
        ]
        items.extend(
            job_activity_to_calendar_item(a)
            for a in self.repo.get_job_activities(self.db, start_before=start_before)
        )
        if first is not None and last is not None:
            items = [item for item in items if overlaps_range(item, first, last)]
        return items

    def calendar_feed(self) -> list[dict]:
        return [
            filter_job_data(self.permissions, item.model_dump(mode="json"))
            for item in self.calendar_items()
        ]

    def with_client(self, job: Job) -> dict:
        """Projected job plus a ``client`` summary, with a placeholder for a missing client"""
        data = self.project(job)
        if job.client:
            data["client"] = {"id": job.client.id, "name": job.client.name}
        else:
            data["client"] = {"name": UNKNOWN_CLIENT_LABEL}
        return data

    def get_jobs_in_range(self, first: date, last: date) -> list[dict]:
        """Jobs (not activities) placed on at least one day of ``[first, last]``"""
        require_permission(self.permissions, "canViewJobs")
        if last < first:
            raise HTTPException(status_code=400, detail="End date must not be earlier than start date")
        jobs = self.repo.get_jobs(self.db, start_before=datetime.combine(last, END_OF_DAY))
        return [
            self.with_client(j)
            for j in jobs
            if overlaps_range(job_to_calendar_item(j), first, last)
        ]

    def get_client_jobs(self, client_id: int) -> list[dict]:
        require_permission(self.permissions, "canViewJobs")
        if not self.db.query(Client.id).filter(Client.id == client_id).first():
            raise HTTPException(status_code=404, detail="Client not found")
        return [self.project(j) for j in self.repo.get_jobs(self.db, client_id=client_id)]
