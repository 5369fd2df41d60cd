"""Collaborator service - roles, accounts and session issuing"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...auth import load_permissions, require_permission
from ...models import Collaborator, Role
from ...permissions import PermissionSet
from ...security_utils import generate_session_token, hash_password, verify_password
from .repository import CollaboratorRepository
from .schemas import (
    CollaboratorCreate,
    CollaboratorResponse,
    CollaboratorUpdate,
    RoleCreate,
    RoleResponse,
    RoleUpdate,
    SessionRequest,
    SessionResponse,
)

logger = logging.getLogger(__name__)


def serialize_collaborator(user: Collaborator) -> CollaboratorResponse:
    return CollaboratorResponse(
        id=user.id,
        name=user.name,
        username=user.username,
        roleIds=user.role_ids or [],
        phone=user.phone,
        email=user.email,
        language=user.language,
        isActive=user.is_active,
        isAdmin=user.is_admin,
    )


def serialize_role(role: Role) -> RoleResponse:
    return RoleResponse(
        id=role.id,
        name=role.name,
        description=role.description,
        permissions=role.permissions or [],
        isDefault=role.is_default,
    )


class CollaboratorService:
    """Service layer for team accounts"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CollaboratorRepository()

    # Roles

    def get_roles(self, permissions: PermissionSet) -> list[RoleResponse]:
        require_permission(permissions, "canViewRoles")
        return [serialize_role(r) for r in self.repo.get_roles(self.db)]

    def create_role(self, permissions: PermissionSet, data: RoleCreate) -> RoleResponse:
        require_permission(permissions, "canCreateRoles")
        if self.repo.get_role_by_name(self.db, data.name):
            raise HTTPException(status_code=400, detail=f"Role '{data.name}' already exists")
        role = self.repo.add(
            self.db,
            Role(
                name=data.name,
                description=data.description,
                permissions=data.permissions,
                is_default=data.isDefault,
            ),
        )
        logger.info(f"Created role {role.id} ({role.name}) with {len(role.permissions)} permissions")
        return serialize_role(role)

    def get_role_or_404(self, role_id: int) -> Role:
        role = self.repo.get_role_by_id(self.db, role_id)
        if not role:
            raise HTTPException(status_code=404, detail="Role not found")
        return role

    def get_role(self, permissions: PermissionSet, role_id: int) -> RoleResponse:
        require_permission(permissions, "canViewRoles")
        return serialize_role(self.get_role_or_404(role_id))

    def update_role(self, permissions: PermissionSet, role_id: int, data: RoleUpdate) -> RoleResponse:
        require_permission(permissions, "canEditRoles")
        role = self.get_role_or_404(role_id)
        if data.name is not None and data.name != role.name and self.repo.get_role_by_name(self.db, data.name):
            raise HTTPException(status_code=400, detail=f"Role '{data.name}' already exists")

        if data.name is not None:
            role.name = data.name
        if data.description is not None:
            role.description = data.description
        if data.permissions is not None:
            role.permissions = data.permissions
        if data.isDefault is not None:
            role.is_default = data.isDefault
        role = self.repo.save(self.db, role)
        logger.info(f"Updated role {role.id} ({role.name})")
        return serialize_role(role)

    def delete_role(self, permissions: PermissionSet, role_id: int) -> dict:
        require_permission(permissions, "canDeleteRoles")
        role = self.get_role_or_404(role_id)
        members = self.repo.get_collaborators_with_role(self.db, role_id)
        if members:
            raise HTTPException(
                status_code=400,
                detail=f"Role is assigned to {len(members)} collaborator(s); reassign them first",
            )
        self.repo.delete(self.db, role)
        logger.info(f"Deleted role {role_id}")
        return {"message": "Role deleted"}

    def get_role_collaborators(
        self, permissions: PermissionSet, role_id: int
    ) -> list[CollaboratorResponse]:
        require_permission(permissions, "canViewCollaborators")
        self.get_role_or_404(role_id)
        return [serialize_collaborator(c) for c in self.repo.get_collaborators_with_role(self.db, role_id)]

    # Collaborators

    def get_collaborators(self, permissions: PermissionSet) -> list[CollaboratorResponse]:
        require_permission(permissions, "canViewCollaborators")
        return [serialize_collaborator(c) for c in self.repo.get_collaborators(self.db)]

    def create_collaborator(
        self, permissions: PermissionSet, data: CollaboratorCreate
    ) -> CollaboratorResponse:
        require_permission(permissions, "canCreateCollaborators")
        if self.repo.get_by_username(self.db, data.username):
            raise HTTPException(status_code=400, detail="Username already taken")

        self._check_role_ids(data.roleIds)

        user = self.repo.add(
            self.db,
            Collaborator(
                name=data.name,
                username=data.username,
                password_hash=hash_password(data.password),
                role_ids=data.roleIds,
                phone=data.phone,
                email=data.email,
                language=data.language,
                is_active=data.isActive,
            ),
        )
        logger.info(f"Created collaborator {user.id} ({user.username})")
        return serialize_collaborator(user)

    def _check_role_ids(self, role_ids: list[int]) -> None:
        found = {r.id for r in self.repo.get_roles_by_ids(self.db, role_ids)}
        missing = sorted(set(role_ids) - found)
        if missing:
            raise HTTPException(status_code=400, detail=f"Unknown role ids: {missing}")

    def get_collaborator_or_404(self, collaborator_id: int) -> Collaborator:
        user = self.repo.get_by_id(self.db, collaborator_id)
        if not user:
            raise HTTPException(status_code=404, detail="Collaborator not found")
        return user

    def get_collaborator(self, permissions: PermissionSet, collaborator_id: int) -> CollaboratorResponse:
        require_permission(permissions, "canViewCollaborators")
        return serialize_collaborator(self.get_collaborator_or_404(collaborator_id))

    def update_collaborator(
        self, permissions: PermissionSet, collaborator_id: int, data: CollaboratorUpdate
    ) -> CollaboratorResponse:
        require_permission(permissions, "canEditCollaborators")
        user = self.get_collaborator_or_404(collaborator_id)
        if data.roleIds is not None:
            self._check_role_ids(data.roleIds)
            user.role_ids = data.roleIds

        for field, attr in (
            ("name", "name"),
            ("phone", "phone"),
            ("email", "email"),
            ("language", "language"),
            ("isActive", "is_active"),
        ):
            value = getattr(data, field)
            if value is not None:
                setattr(user, attr, value)
        if data.password is not None:
            user.password_hash = hash_password(data.password)

        user = self.repo.save(self.db, user)
        logger.info(f"Updated collaborator {user.id} ({user.username})")
        return serialize_collaborator(user)

    def delete_collaborator(
        self, permissions: PermissionSet, collaborator_id: int, current_user_id: int
    ) -> dict:
        """Delete an account; its jobs stay and become unassigned"""
        require_permission(permissions, "canDeleteCollaborators")
        if collaborator_id == current_user_id:
            raise HTTPException(status_code=400, detail="You cannot delete your own account")
        user = self.get_collaborator_or_404(collaborator_id)
        for job in user.jobs:
            job.assigned_user_id = None
        self.repo.delete(self.db, user)
        logger.info(f"Deleted collaborator {collaborator_id}")
        return {"message": "Collaborator deleted"}

    # Sessions

    def create_session(self, data: SessionRequest) -> SessionResponse:
        user = self.repo.get_by_username(self.db, data.username)
        if not user or not verify_password(data.password, user.password_hash):
            logger.warning(f"Failed login for '{data.username}'")
            raise HTTPException(status_code=401, detail="Invalid username or password")
        if not user.is_active:
            raise HTTPException(status_code=403, detail="Account is not active")

        token = generate_session_token({"collaborator_id": user.id})
        logger.info(f"Session issued for collaborator {user.id}")
        return SessionResponse(
            token=token,
            collaborator=serialize_collaborator(user),
            permissions=load_permissions(self.db, user),
        )

    def ensure_admin(self, username: str, password: str) -> bool:
        """Create the owner account on an empty database; returns True when created"""
        if self.repo.count_collaborators(self.db) > 0:
            return False
        self.repo.add(
            self.db,
            Collaborator(
                name=username,
                username=username,
                password_hash=hash_password(password),
                role_ids=[],
                is_admin=True,
            ),
        )
        logger.info(f"Created admin account '{username}'")
        return True
