"""Job router - FastAPI endpoints for job operations"""

import logging
from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ...auth import get_current_permissions, get_current_user
from ...database import get_db
from ...models import Collaborator
from ...permissions import PermissionSet
from .schemas import JobComplete, JobCreate, JobUpdate
from .service import JobService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


def get_job_service(
    db: Session = Depends(get_db),
    permissions: PermissionSet = Depends(get_current_permissions),
) -> JobService:
    """Dependency injection for JobService"""
    return JobService(db, permissions)


@router.get("")
async def get_jobs(
    status: Optional[str] = Query(None, description="Filter by status"),
    client_id: Optional[int] = Query(None, alias="clientId"),
    assigned_user_id: Optional[int] = Query(None, alias="assignedUserId"),
    service: JobService = Depends(get_job_service),
):
    """Get all jobs with progress, filtered by the caller's field permissions"""
    return service.get_jobs(status, client_id, assigned_user_id)


@router.get("/calendar-feed")
async def get_calendar_feed(service: JobService = Depends(get_job_service)):
    """Jobs plus scheduled job activities, in calendar placement shape"""
    return service.calendar_feed()


def parse_range_bound(value: str) -> date:
    """Accepts an ISO date or datetime; only the calendar day is kept"""
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format") from None


@router.get("/range")
async def get_jobs_in_range(
    start: Optional[str] = Query(None, description="First day, YYYY-MM-DD"),
    end: Optional[str] = Query(None, description="Last day, YYYY-MM-DD"),
    service: JobService = Depends(get_job_service),
):
    """Jobs placed on at least one day of the range, each with its client summary"""
    if not start or not end:
        raise HTTPException(status_code=400, detail="Start and end dates are required")
    return service.get_jobs_in_range(parse_range_bound(start), parse_range_bound(end))


@router.get("/{job_id}")
async def get_job(job_id: int, service: JobService = Depends(get_job_service)):
    return service.get_job(job_id)


@router.post("", status_code=201)
async def create_job(
    data: JobCreate,
    current_user: Collaborator = Depends(get_current_user),
    service: JobService = Depends(get_job_service),
):
    """Create a job; unassigned jobs are assigned to the creator"""
    return service.create_job(data, assigned_user_id=current_user.id)


@router.patch("/{job_id}")
async def update_job(
    job_id: int,
    data: JobUpdate,
    service: JobService = Depends(get_job_service),
):
    return service.update_job(job_id, data)


@router.post("/{job_id}/complete")
async def complete_job(
    job_id: int,
    data: JobComplete,
    service: JobService = Depends(get_job_service),
):
    """Mark a job completed with its actual duration"""
    return service.complete_job(job_id, data)


@router.delete("/{job_id}")
async def delete_job(job_id: int, service: JobService = Depends(get_job_service)):
    return service.delete_job(job_id)
