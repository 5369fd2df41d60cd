"""Client domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ...models import CLIENT_TYPES
from ...shared.validators import validate_choice, validate_email, validate_geo_location, validate_phone


class ClientBase(BaseModel):
    @field_validator("phone", check_fields=False)
    @classmethod
    def check_phone(cls, v):
        return validate_phone(v)

    @field_validator("email", check_fields=False)
    @classmethod
    def check_email(cls, v):
        return validate_email(v)

    @field_validator("geoLocation", check_fields=False)
    @classmethod
    def check_geo_location(cls, v):
        return validate_geo_location(v)

    @field_validator("type", check_fields=False)
    @classmethod
    def check_type(cls, v):
        return validate_choice(v, CLIENT_TYPES, "client type")


class ClientCreate(ClientBase):
    """Schema for creating a new client"""

    name: str
    type: str = "residential"
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    geoLocation: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        if not v.strip():
            raise ValueError("Client name is required")
        return v.strip()


class ClientUpdate(ClientBase):
    """Schema for updating an existing client"""

    name: Optional[str] = None
    type: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    geoLocation: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Client name is required")
        return v.strip() if v is not None else v


class ClientResponse(BaseModel):
    """Schema for client response"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    type: str
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    geoLocation: Optional[str] = None
    notes: Optional[str] = None
    createdAt: Optional[datetime] = None
