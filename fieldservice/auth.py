import logging
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .database import get_db
from .models import Collaborator, Role
from .permissions import PermissionSet
from .security_utils import verify_session_token

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Collaborator:
    """Resolve the bearer session token to an active collaborator"""
    if credentials is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Please provide a valid Bearer token in the Authorization header.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    data = verify_session_token(credentials.credentials)
    if not data or "collaborator_id" not in data:
        raise HTTPException(status_code=401, detail="Invalid or expired session")

    user = db.query(Collaborator).filter(Collaborator.id == data["collaborator_id"]).first()
    if not user:
        logger.warning(f"Session for unknown collaborator {data['collaborator_id']}")
        raise HTTPException(status_code=401, detail="User not found")
    if not user.is_active:
        raise HTTPException(status_code=403, detail="Account is not active")
    return user


def load_permissions(db: Session, user: Collaborator) -> PermissionSet:
    """Union of the permissions granted by the collaborator's roles; admins get everything"""
    if user.is_admin:
        return PermissionSet.full()

    role_ids = user.role_ids or []
    if not role_ids:
        return PermissionSet()

    names: set[str] = set()
    for role in db.query(Role).filter(Role.id.in_(role_ids)).all():
        names.update(role.permissions or [])

    known = set(PermissionSet.model_fields)
    unknown = names - known
    if unknown:
        logger.warning(f"Ignoring unknown permissions on roles {role_ids}: {sorted(unknown)}")
    return PermissionSet.from_names(names & known)


def get_current_permissions(
    current_user: Collaborator = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> PermissionSet:
    return load_permissions(db, current_user)


def require_permission(permissions: PermissionSet, permission: str) -> None:
    if not permissions.has_permission(permission):
        logger.info(f"Permission denied: {permission}")
        raise HTTPException(status_code=403, detail=f"Missing permission: {permission}")
