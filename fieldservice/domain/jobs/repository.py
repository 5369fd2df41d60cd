"""Job repository - Database operations for jobs"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Job, JobActivity


class JobRepository:
    """Repository for job database operations"""

    @staticmethod
    def get_jobs(
        db: Session,
        status: Optional[str] = None,
        client_id: Optional[int] = None,
        assigned_user_id: Optional[int] = None,
        start_before: Optional[datetime] = None,
    ) -> list[Job]:
        """Get jobs ordered by start date, with optional filters"""
        query = db.query(Job).options(joinedload(Job.client))

        if status and status != "all":
            query = query.filter(Job.status == status)
        if client_id is not None:
            query = query.filter(Job.client_id == client_id)
        if assigned_user_id is not None:
            query = query.filter(Job.assigned_user_id == assigned_user_id)
        if start_before is not None:
            query = query.filter(Job.start_date <= start_before)

        return query.order_by(Job.start_date, Job.id).all()

    @staticmethod
    def get_job_by_id(db: Session, job_id: int) -> Optional[Job]:
        return db.query(Job).options(joinedload(Job.client)).filter(Job.id == job_id).first()

    @staticmethod
    def create_job(db: Session, **job_data) -> Job:
        job = Job(**job_data)
        db.add(job)
        db.commit()
        db.refresh(job)
        return job

    @staticmethod
    def update_job(db: Session, job: Job, **updates) -> Job:
        """Update a job; endDate may be cleared explicitly"""
        for key, value in updates.items():
            if hasattr(job, key) and (value is not None or key == "end_date"):
                setattr(job, key, value)

        db.commit()
        db.refresh(job)
        return job

    @staticmethod
    def delete_job(db: Session, job: Job) -> None:
        db.delete(job)
        db.commit()

    @staticmethod
    def get_job_activities(
        db: Session, job_id: Optional[int] = None, start_before: Optional[datetime] = None
    ) -> list[JobActivity]:
        query = db.query(JobActivity).options(
            joinedload(JobActivity.job), joinedload(JobActivity.activity)
        )
        if job_id is not None:
            query = query.filter(JobActivity.job_id == job_id)
        if start_before is not None:
            query = query.filter(JobActivity.start_date <= start_before)
        return query.order_by(JobActivity.start_date, JobActivity.id).all()
