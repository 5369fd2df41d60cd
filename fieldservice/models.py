from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base

JOB_STATUSES = ("scheduled", "in_progress", "completed", "cancelled")
JOB_TYPES = ("repair", "installation", "maintenance", "quote", "emergency")
CLIENT_TYPES = ("residential", "commercial", "industrial")


class Role(Base):
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    permissions = Column(JSON, default=list, nullable=False)  # Granted permission names
    is_default = Column(Boolean, default=False, nullable=False)


class Collaborator(Base):
    __tablename__ = "collaborators"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    username = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=True)
    role_ids = Column(JSON, default=list, nullable=False)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)  # Owner account, bypasses roles
    language = Column(String(10), default="it", nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    jobs = relationship("Job", back_populates="assigned_user")


class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    type = Column(String(50), default="residential", nullable=False)  # residential, commercial, industrial
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    address = Column(Text, nullable=True)
    geo_location = Column(String(100), nullable=True)  # "latitude,longitude"
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    jobs = relationship("Job", back_populates="client")


class JobType(Base):
    __tablename__ = "job_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    activities = relationship("Activity", back_populates="job_type")


class Activity(Base):
    """Catalogue entry describing a reusable unit of work for a job type"""

    __tablename__ = "activities"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    job_type_id = Column(Integer, ForeignKey("job_types.id"), nullable=True)
    description = Column(Text, nullable=True)
    default_duration = Column(Float, nullable=True)  # Hours
    default_rate = Column(Float, nullable=True)
    default_cost = Column(Float, nullable=True)

    job_type = relationship("JobType", back_populates="activities")


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False)
    type = Column(String(50), default="repair", nullable=False)
    # Status workflow: scheduled → in_progress → completed (or cancelled at any point)
    status = Column(String(50), default="scheduled", nullable=False, index=True)

    # Scheduling
    start_date = Column(DateTime, nullable=False, index=True)
    end_date = Column(DateTime, nullable=True)
    duration = Column(Float, default=2.0, nullable=False)  # Hours

    # Pricing
    hourly_rate = Column(Float, default=25.0, nullable=False)
    materials_cost = Column(Float, default=0.0, nullable=False)
    cost = Column(Float, default=0.0, nullable=False)  # Total cost
    labor_cost = Column(Float, default=0.0, nullable=False)

    location = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    assigned_user_id = Column(Integer, ForeignKey("collaborators.id"), nullable=True)

    # Completion
    completed_date = Column(DateTime, nullable=True)
    actual_duration = Column(Float, nullable=True)
    photos = Column(JSON, default=list, nullable=False)  # Photo URLs

    created_at = Column(DateTime, server_default=func.now())

    client = relationship("Client", back_populates="jobs")
    assigned_user = relationship("Collaborator", back_populates="jobs")
    activities = relationship(
        "JobActivity", back_populates="job", cascade="all, delete-orphan"
    )


class JobActivity(Base):
    """An activity scheduled on a specific job, shown striped on the calendar"""

    __tablename__ = "job_activities"

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), nullable=False)
    activity_id = Column(Integer, ForeignKey("activities.id"), nullable=False)
    start_date = Column(DateTime, nullable=False)
    duration = Column(Float, nullable=False)  # Hours
    status = Column(String(50), default="scheduled", nullable=False)
    completed_date = Column(DateTime, nullable=True)
    actual_duration = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)
    photos = Column(JSON, default=list, nullable=False)

    job = relationship("Job", back_populates="activities")
    activity = relationship("Activity")
