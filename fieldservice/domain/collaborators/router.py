"""Collaborator router - roles, collaborators, sessions and permissions"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_permissions, get_current_user
from ...database import get_db
from ...models import Collaborator
from ...permissions import PermissionSet
from .schemas import (
    CollaboratorCreate,
    CollaboratorUpdate,
    PermissionsResponse,
    RoleCreate,
    RoleUpdate,
    SessionRequest,
)
from .service import CollaboratorService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Collaborators"])


def get_collaborator_service(db: Session = Depends(get_db)) -> CollaboratorService:
    """Dependency injection for CollaboratorService"""
    return CollaboratorService(db)


@router.post("/auth/session")
async def create_session(
    data: SessionRequest, service: CollaboratorService = Depends(get_collaborator_service)
):
    """Exchange username and password for a bearer token"""
    return service.create_session(data)


@router.get("/permissions", response_model=PermissionsResponse)
async def get_permissions(permissions: PermissionSet = Depends(get_current_permissions)):
    """Capability matrix of the current collaborator, loaded once per session by clients"""
    return PermissionsResponse(permissions=permissions)


@router.get("/roles")
async def get_roles(
    permissions: PermissionSet = Depends(get_current_permissions),
    service: CollaboratorService = Depends(get_collaborator_service),
):
    return service.get_roles(permissions)


@router.post("/roles", status_code=201)
async def create_role(
    data: RoleCreate,
    permissions: PermissionSet = Depends(get_current_permissions),
    service: CollaboratorService = Depends(get_collaborator_service),
):
    return service.create_role(permissions, data)


@router.get("/collaborators")
async def get_collaborators(
    permissions: PermissionSet = Depends(get_current_permissions),
    service: CollaboratorService = Depends(get_collaborator_service),
):
    return service.get_collaborators(permissions)


@router.post("/collaborators", status_code=201)
async def create_collaborator(
    data: CollaboratorCreate,
    permissions: PermissionSet = Depends(get_current_permissions),
    service: CollaboratorService = Depends(get_collaborator_service),
):
    return service.create_collaborator(permissions, data)


@router.get("/roles/{role_id}")
async def get_role(
    role_id: int,
    permissions: PermissionSet = Depends(get_current_permissions),
    service: CollaboratorService = Depends(get_collaborator_service),
):
    return service.get_role(permissions, role_id)


@router.patch("/roles/{role_id}")
async def update_role(
    role_id: int,
    data: RoleUpdate,
    permissions: PermissionSet = Depends(get_current_permissions),
    service: CollaboratorService = Depends(get_collaborator_service),
):
    """Change a role's name or grants; members pick up new grants on their next request"""
    return service.update_role(permissions, role_id, data)


@router.delete("/roles/{role_id}")
async def delete_role(
    role_id: int,
    permissions: PermissionSet = Depends(get_current_permissions),
    service: CollaboratorService = Depends(get_collaborator_service),
):
    return service.delete_role(permissions, role_id)


@router.get("/roles/{role_id}/collaborators")
async def get_role_collaborators(
    role_id: int,
    permissions: PermissionSet = Depends(get_current_permissions),
    service: CollaboratorService = Depends(get_collaborator_service),
):
    return service.get_role_collaborators(permissions, role_id)


@router.get("/collaborators/{collaborator_id}")
async def get_collaborator(
    collaborator_id: int,
    permissions: PermissionSet = Depends(get_current_permissions),
    service: CollaboratorService = Depends(get_collaborator_service),
):
    return service.get_collaborator(permissions, collaborator_id)


@router.patch("/collaborators/{collaborator_id}")
async def update_collaborator(
    collaborator_id: int,
    data: CollaboratorUpdate,
    permissions: PermissionSet = Depends(get_current_permissions),
    service: CollaboratorService = Depends(get_collaborator_service),
):
    return service.update_collaborator(permissions, collaborator_id, data)


@router.delete("/collaborators/{collaborator_id}")
async def delete_collaborator(
    collaborator_id: int,
    current_user: Collaborator = Depends(get_current_user),
    permissions: PermissionSet = Depends(get_current_permissions),
    service: CollaboratorService = Depends(get_collaborator_service),
):
    return service.delete_collaborator(permissions, collaborator_id, current_user.id)
