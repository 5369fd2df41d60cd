"""Collaborator domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, field_validator

from ...permissions import PERMISSION_NAMES, PermissionSet
from ...shared.validators import validate_email, validate_phone


def check_permission_names(names: Optional[list[str]]) -> Optional[list[str]]:
    """Reject unknown permission names; store the rest sorted and de-duplicated"""
    if names is None:
        return names
    unknown = [p for p in names if p not in PERMISSION_NAMES]
    if unknown:
        raise ValueError(f"Unknown permissions: {', '.join(unknown)}")
    return sorted(set(names))


def check_password(password: Optional[str]) -> Optional[str]:
    if password is not None and len(password) < 8:
        raise ValueError("Password must be at least 8 characters long")
    return password


def check_required_text(value: Optional[str], label: str) -> Optional[str]:
    if value is None:
        return value
    if not value.strip():
        raise ValueError(f"{label} is required")
    return value.strip()


class RoleCreate(BaseModel):
    name: str
    description: Optional[str] = None
    permissions: list[str] = []
    isDefault: bool = False

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return check_required_text(v, "Role name")

    @field_validator("permissions")
    @classmethod
    def validate_permissions(cls, v):
        return check_permission_names(v)


class RoleUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    permissions: Optional[list[str]] = None
    isDefault: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return check_required_text(v, "Role name")

    @field_validator("permissions")
    @classmethod
    def validate_permissions(cls, v):
        return check_permission_names(v)


class RoleResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    permissions: list[str]
    isDefault: bool


class CollaboratorCreate(BaseModel):
    name: str
    username: str
    password: str
    roleIds: list[int] = []
    phone: Optional[str] = None
    email: Optional[str] = None
    language: str = "it"
    isActive: bool = True

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        return check_password(v)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        return validate_phone(v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)


class CollaboratorUpdate(BaseModel):
    """Partial update; a new password is re-hashed, roleIds replaces the current list"""

    name: Optional[str] = None
    password: Optional[str] = None
    roleIds: Optional[list[int]] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    language: Optional[str] = None
    isActive: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return check_required_text(v, "Name")

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        return check_password(v)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        return validate_phone(v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)


class CollaboratorResponse(BaseModel):
    id: int
    name: str
    username: str
    roleIds: list[int]
    phone: Optional[str] = None
    email: Optional[str] = None
    language: str
    isActive: bool
    isAdmin: bool


class SessionRequest(BaseModel):
    username: str
    password: str


class SessionResponse(BaseModel):
    token: str
    collaborator: CollaboratorResponse
    permissions: PermissionSet


class PermissionsResponse(BaseModel):
    permissions: PermissionSet
