"""Job domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...calendar.placement import to_local_naive
from ...models import JOB_STATUSES, JOB_TYPES
from ...shared.validators import validate_choice


def normalize_status(v: Optional[str]) -> Optional[str]:
    # "planned" is the legacy spelling of "scheduled"
    if v == "planned":
        v = "scheduled"
    return validate_choice(v, JOB_STATUSES, "status")


class JobCreate(BaseModel):
    """Schema for creating a new job"""

    title: str
    clientId: int
    type: str = "repair"
    status: str = "scheduled"
    startDate: datetime
    endDate: Optional[datetime] = None
    duration: float = Field(default=2.0, ge=0)  # Hours
    hourlyRate: float = Field(default=25.0, ge=0)
    materialsCost: float = Field(default=0.0, ge=0)
    cost: Optional[float] = Field(default=None, ge=0)
    laborCost: Optional[float] = Field(default=None, ge=0)
    location: Optional[str] = None
    notes: Optional[str] = None
    assignedUserId: Optional[int] = None
    photos: list[str] = []

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        if not v.strip():
            raise ValueError("Job title is required")
        return v.strip()

    @field_validator("type")
    @classmethod
    def validate_type(cls, v):
        return validate_choice(v, JOB_TYPES, "job type")

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        return normalize_status(v)

    @field_validator("startDate", "endDate")
    @classmethod
    def validate_dates(cls, v):
        return to_local_naive(v) if v else v

    @model_validator(mode="after")
    def validate_interval(self):
        if self.endDate is not None and self.endDate < self.startDate:
            raise ValueError("endDate must not be earlier than startDate")
        return self


class JobUpdate(BaseModel):
    """Schema for updating an existing job"""

    title: Optional[str] = None
    clientId: Optional[int] = None
    type: Optional[str] = None
    status: Optional[str] = None
    startDate: Optional[datetime] = None
    endDate: Optional[datetime] = None
    duration: Optional[float] = Field(default=None, ge=0)
    hourlyRate: Optional[float] = Field(default=None, ge=0)
    materialsCost: Optional[float] = Field(default=None, ge=0)
    cost: Optional[float] = Field(default=None, ge=0)
    laborCost: Optional[float] = Field(default=None, ge=0)
    location: Optional[str] = None
    notes: Optional[str] = None
    assignedUserId: Optional[int] = None
    photos: Optional[list[str]] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Job title is required")
        return v.strip() if v is not None else v

    @field_validator("type")
    @classmethod
    def validate_type(cls, v):
        return validate_choice(v, JOB_TYPES, "job type")

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        return normalize_status(v)

    @field_validator("startDate", "endDate")
    @classmethod
    def validate_dates(cls, v):
        return to_local_naive(v) if v else v


class JobComplete(BaseModel):
    """Schema for marking a job (or job activity) as completed"""

    completedDate: datetime
    actualDuration: float = Field(ge=0)
    notes: Optional[str] = None
    photos: list[str] = []

    @field_validator("completedDate")
    @classmethod
    def validate_completed_date(cls, v):
        return to_local_naive(v)


class JobResponse(BaseModel):
    """Schema for job response"""

    id: int
    title: str
    clientId: int
    clientName: str
    type: str
    status: str
    startDate: datetime
    endDate: Optional[datetime] = None
    effectiveEndDate: datetime
    duration: float
    hourlyRate: float
    materialsCost: float
    cost: float
    laborCost: float
    location: Optional[str] = None
    notes: Optional[str] = None
    assignedUserId: Optional[int] = None
    createdAt: Optional[datetime] = None
    completedDate: Optional[datetime] = None
    actualDuration: Optional[float] = None
    photos: list[str] = []
    progressPercentage: int
