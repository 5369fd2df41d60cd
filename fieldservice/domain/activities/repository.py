"""Activity repository - Database operations for job types, activities and job activities"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Activity, JobActivity, JobType


class ActivityRepository:
    """Repository for activity database operations"""

    @staticmethod
    def get_job_types(db: Session) -> list[JobType]:
        return db.query(JobType).order_by(JobType.name).all()

    @staticmethod
    def get_job_type_by_id(db: Session, job_type_id: int) -> Optional[JobType]:
        return db.query(JobType).filter(JobType.id == job_type_id).first()

    @staticmethod
    def get_activities(db: Session, job_type_id: Optional[int] = None) -> list[Activity]:
        query = db.query(Activity)
        if job_type_id is not None:
            query = query.filter(Activity.job_type_id == job_type_id)
        return query.order_by(Activity.name).all()

    @staticmethod
    def get_activity_by_id(db: Session, activity_id: int) -> Optional[Activity]:
        return db.query(Activity).filter(Activity.id == activity_id).first()

    @staticmethod
    def get_job_activity_by_id(db: Session, job_activity_id: int) -> Optional[JobActivity]:
        return (
            db.query(JobActivity)
            .options(joinedload(JobActivity.activity))
            .filter(JobActivity.id == job_activity_id)
            .first()
        )

    @staticmethod
    def add(db: Session, record):
        db.add(record)
        db.commit()
        db.refresh(record)
        return record

    @staticmethod
    def save(db: Session, record):
        db.commit()
        db.refresh(record)
        return record

    @staticmethod
    def delete(db: Session, record) -> None:
        db.delete(record)
        db.commit()
