"""Activity service - Business logic for the activity catalogue and job activities"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...auth import require_permission
from ...calendar import progress_percentage
from ...models import Activity, JobActivity, JobType
from ...permissions import PermissionSet
from ..jobs.repository import JobRepository
from ..jobs.schemas import JobComplete
from ..jobs.service import job_activity_to_calendar_item
from .repository import ActivityRepository
from .schemas import (
    ActivityCreate,
    ActivityResponse,
    JobActivityCreate,
    JobActivityResponse,
    JobTypeCreate,
    JobTypeResponse,
    JobTypeUpdate,
)

logger = logging.getLogger(__name__)

# Used when neither the request nor the catalogue entry gives a duration
DEFAULT_ACTIVITY_DURATION = 1.0


def serialize_activity(activity: Activity) -> ActivityResponse:
    return ActivityResponse(
        id=activity.id,
        name=activity.name,
        jobTypeId=activity.job_type_id,
        description=activity.description,
        defaultDuration=activity.default_duration,
        defaultRate=activity.default_rate,
        defaultCost=activity.default_cost,
    )


class ActivityService:
    """Service layer for activity business logic"""

    def __init__(self, db: Session, permissions: PermissionSet, now: Optional[datetime] = None):
        self.db = db
        self.permissions = permissions
        self.now = now
        self.repo = ActivityRepository()

    # Job types

    def get_job_types(self) -> list[JobTypeResponse]:
        require_permission(self.permissions, "canViewJobTypes")
        return [
            JobTypeResponse(id=t.id, name=t.name, description=t.description)
            for t in self.repo.get_job_types(self.db)
        ]

    def create_job_type(self, data: JobTypeCreate) -> JobTypeResponse:
        require_permission(self.permissions, "canCreateJobTypes")
        job_type = self.repo.add(self.db, JobType(name=data.name, description=data.description))
        return JobTypeResponse(id=job_type.id, name=job_type.name, description=job_type.description)

    def get_job_type_or_404(self, job_type_id: int) -> JobType:
        job_type = self.repo.get_job_type_by_id(self.db, job_type_id)
        if not job_type:
            raise HTTPException(status_code=404, detail="Job type not found")
        return job_type

    def get_job_type(self, job_type_id: int) -> JobTypeResponse:
        require_permission(self.permissions, "canViewJobTypes")
        job_type = self.get_job_type_or_404(job_type_id)
        return JobTypeResponse(id=job_type.id, name=job_type.name, description=job_type.description)

    def update_job_type(self, job_type_id: int, data: JobTypeUpdate) -> JobTypeResponse:
        require_permission(self.permissions, "canEditJobTypes")
        job_type = self.get_job_type_or_404(job_type_id)
        if data.name is not None:
            job_type.name = data.name
        if data.description is not None:
            job_type.description = data.description
        job_type = self.repo.save(self.db, job_type)
        return JobTypeResponse(id=job_type.id, name=job_type.name, description=job_type.description)

    def delete_job_type(self, job_type_id: int) -> dict:
        require_permission(self.permissions, "canDeleteJobTypes")
        job_type = self.get_job_type_or_404(job_type_id)
        if job_type.activities:
            raise HTTPException(
                status_code=400,
                detail=f"Job type has {len(job_type.activities)} activity(ies); delete or move them first",
            )
        self.repo.delete(self.db, job_type)
        logger.info(f"Deleted job type {job_type_id}")
        return {"message": "Job type deleted"}

    # Activity catalogue

    def get_activities(self, job_type_id: Optional[int] = None) -> list[ActivityResponse]:
        require_permission(self.permissions, "canViewActivities")
        return [serialize_activity(a) for a in self.repo.get_activities(self.db, job_type_id)]

    def get_activity(self, activity_id: int) -> ActivityResponse:
        require_permission(self.permissions, "canViewActivities")
        activity = self.repo.get_activity_by_id(self.db, activity_id)
        if not activity:
            raise HTTPException(status_code=404, detail="Activity not found")
        return serialize_activity(activity)

    def create_activity(self, data: ActivityCreate) -> ActivityResponse:
        require_permission(self.permissions, "canCreateActivities")
        if data.jobTypeId is not None and not self.repo.get_job_type_by_id(self.db, data.jobTypeId):
            raise HTTPException(status_code=400, detail=f"Job type {data.jobTypeId} does not exist")

        activity = self.repo.add(
            self.db,
            Activity(
                name=data.name,
                job_type_id=data.jobTypeId,
                description=data.description,
                default_duration=data.defaultDuration,
                default_rate=data.defaultRate,
                default_cost=data.defaultCost,
            ),
        )
        logger.info(f"Created activity {activity.id} ({activity.name})")
        return serialize_activity(activity)

    def delete_activity(self, activity_id: int) -> dict:
        require_permission(self.permissions, "canDeleteActivities")
        activity = self.repo.get_activity_by_id(self.db, activity_id)
        if not activity:
            raise HTTPException(status_code=404, detail="Activity not found")
        in_use = self.db.query(JobActivity.id).filter(JobActivity.activity_id == activity_id).first()
        if in_use:
            raise HTTPException(status_code=400, detail="Activity is scheduled on one or more jobs")
        self.repo.delete(self.db, activity)
        return {"message": "Activity deleted"}

    # Activities scheduled on jobs

    def serialize_job_activity(self, job_activity: JobActivity) -> JobActivityResponse:
        return JobActivityResponse(
            id=job_activity.id,
            jobId=job_activity.job_id,
            activityId=job_activity.activity_id,
            activityName=job_activity.activity.name if job_activity.activity else None,
            startDate=job_activity.start_date,
            duration=job_activity.duration,
            status=job_activity.status,
            completedDate=job_activity.completed_date,
            actualDuration=job_activity.actual_duration,
            notes=job_activity.notes,
            photos=job_activity.photos or [],
            progressPercentage=progress_percentage(
                job_activity_to_calendar_item(job_activity), self.now
            ),
        )

    def _get_job(self, job_id: int):
        job = JobRepository.get_job_by_id(self.db, job_id)
        if not job:
            raise HTTPException(status_code=404, detail="Job not found")
        return job

    def get_job_activities(self, job_id: int) -> list[JobActivityResponse]:
        require_permission(self.permissions, "canViewJobs")
        self._get_job(job_id)
        return [
            self.serialize_job_activity(a) for a in JobRepository.get_job_activities(self.db, job_id)
        ]

    def create_job_activity(self, job_id: int, data: JobActivityCreate) -> JobActivityResponse:
        require_permission(self.permissions, "canEditJobs")
        job = self._get_job(job_id)
        activity = self.repo.get_activity_by_id(self.db, data.activityId)
        if not activity:
            raise HTTPException(status_code=400, detail=f"Activity {data.activityId} does not exist")

        duration = data.duration
        if duration is None:
            duration = activity.default_duration or DEFAULT_ACTIVITY_DURATION

        job_activity = self.repo.add(
            self.db,
            JobActivity(
                job_id=job.id,
                activity_id=activity.id,
                start_date=data.startDate,
                duration=duration,
                status=data.status,
                notes=data.notes,
                photos=[],
            ),
        )
        logger.info(f"Scheduled activity '{activity.name}' on job {job.id} at {data.startDate}")
        return self.serialize_job_activity(job_activity)

    def complete_job_activity(self, job_activity_id: int, data: JobComplete) -> JobActivityResponse:
        require_permission(self.permissions, "canUpdateJobStatus")
        job_activity = self.repo.get_job_activity_by_id(self.db, job_activity_id)
        if not job_activity:
            raise HTTPException(status_code=404, detail="Job activity not found")

        job_activity.status = "completed"
        job_activity.completed_date = data.completedDate
        job_activity.actual_duration = data.actualDuration
        if data.notes is not None:
            job_activity.notes = data.notes
        if data.photos:
            job_activity.photos = data.photos
        job_activity = self.repo.save(self.db, job_activity)
        return self.serialize_job_activity(job_activity)

    def delete_job_activity(self, job_activity_id: int) -> dict:
        require_permission(self.permissions, "canEditJobs")
        job_activity = self.repo.get_job_activity_by_id(self.db, job_activity_id)
        if not job_activity:
            raise HTTPException(status_code=404, detail="Job activity not found")
        self.repo.delete(self.db, job_activity)
        return {"message": "Job activity deleted"}
