"""Activity domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...calendar.placement import to_local_naive
from ..jobs.schemas import normalize_status


class JobTypeCreate(BaseModel):
    name: str
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError("Job type name is required")
        return v.strip()


class JobTypeUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Job type name is required")
        return v.strip() if v is not None else v


class JobTypeResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None


class ActivityCreate(BaseModel):
    """Schema for a catalogue activity"""

    name: str
    jobTypeId: Optional[int] = None
    description: Optional[str] = None
    defaultDuration: Optional[float] = Field(default=None, ge=0)
    defaultRate: Optional[float] = Field(default=None, ge=0)
    defaultCost: Optional[float] = Field(default=None, ge=0)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError("Activity name is required")
        return v.strip()


class ActivityResponse(BaseModel):
    id: int
    name: str
    jobTypeId: Optional[int] = None
    description: Optional[str] = None
    defaultDuration: Optional[float] = None
    defaultRate: Optional[float] = None
    defaultCost: Optional[float] = None


class JobActivityCreate(BaseModel):
    """Schema for scheduling a catalogue activity on a job"""

    activityId: int
    startDate: datetime
    duration: Optional[float] = Field(default=None, ge=0)  # Falls back to the activity default
    status: str = "scheduled"
    notes: Optional[str] = None

    @field_validator("startDate")
    @classmethod
    def validate_start(cls, v):
        return to_local_naive(v)

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        return normalize_status(v)


class JobActivityResponse(BaseModel):
    id: int
    jobId: int
    activityId: int
    activityName: Optional[str] = None
    startDate: datetime
    duration: float
    status: str
    completedDate: Optional[datetime] = None
    actualDuration: Optional[float] = None
    notes: Optional[str] = None
    photos: list[str] = []
    progressPercentage: int
