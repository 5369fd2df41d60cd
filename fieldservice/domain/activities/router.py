"""Activity router - job types, activity catalogue and job activity endpoints"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_permissions
from ...database import get_db
from ...permissions import PermissionSet
from ..jobs.schemas import JobComplete
from .schemas import ActivityCreate, JobActivityCreate, JobTypeCreate, JobTypeUpdate
from .service import ActivityService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Activities"])


def get_activity_service(
    db: Session = Depends(get_db),
    permissions: PermissionSet = Depends(get_current_permissions),
) -> ActivityService:
    """Dependency injection for ActivityService"""
    return ActivityService(db, permissions)


# ============================================================================
# JOB TYPES
# ============================================================================


@router.get("/job-types")
async def get_job_types(service: ActivityService = Depends(get_activity_service)):
    return service.get_job_types()


@router.post("/job-types", status_code=201)
async def create_job_type(
    data: JobTypeCreate, service: ActivityService = Depends(get_activity_service)
):
    return service.create_job_type(data)


@router.get("/job-types/{job_type_id}")
async def get_job_type(job_type_id: int, service: ActivityService = Depends(get_activity_service)):
    return service.get_job_type(job_type_id)


@router.patch("/job-types/{job_type_id}")
async def update_job_type(
    job_type_id: int,
    data: JobTypeUpdate,
    service: ActivityService = Depends(get_activity_service),
):
    return service.update_job_type(job_type_id, data)


@router.delete("/job-types/{job_type_id}")
async def delete_job_type(job_type_id: int, service: ActivityService = Depends(get_activity_service)):
    return service.delete_job_type(job_type_id)


# ============================================================================
# ACTIVITY CATALOGUE
# ============================================================================


@router.get("/activities")
async def get_activities(
    job_type_id: Optional[int] = Query(None, alias="jobTypeId"),
    service: ActivityService = Depends(get_activity_service),
):
    return service.get_activities(job_type_id)


@router.get("/activities/{activity_id}")
async def get_activity(activity_id: int, service: ActivityService = Depends(get_activity_service)):
    return service.get_activity(activity_id)


@router.post("/activities", status_code=201)
async def create_activity(
    data: ActivityCreate, service: ActivityService = Depends(get_activity_service)
):
    return service.create_activity(data)


@router.delete("/activities/{activity_id}")
async def delete_activity(
    activity_id: int, service: ActivityService = Depends(get_activity_service)
):
    return service.delete_activity(activity_id)


# ============================================================================
# ACTIVITIES SCHEDULED ON JOBS
# ============================================================================


@router.get("/jobs/{job_id}/activities")
async def get_job_activities(job_id: int, service: ActivityService = Depends(get_activity_service)):
    return service.get_job_activities(job_id)


@router.post("/jobs/{job_id}/activities", status_code=201)
async def create_job_activity(
    job_id: int,
    data: JobActivityCreate,
    service: ActivityService = Depends(get_activity_service),
):
    return service.create_job_activity(job_id, data)


@router.post("/job-activities/{job_activity_id}/complete")
async def complete_job_activity(
    job_activity_id: int,
    data: JobComplete,
    service: ActivityService = Depends(get_activity_service),
):
    return service.complete_job_activity(job_activity_id, data)


@router.delete("/job-activities/{job_activity_id}")
async def delete_job_activity(
    job_activity_id: int, service: ActivityService = Depends(get_activity_service)
):
    return service.delete_job_activity(job_activity_id)
