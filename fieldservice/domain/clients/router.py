"""Client router - FastAPI endpoints for client operations"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_permissions
from ...database import get_db
from ...permissions import PermissionSet
from ..jobs.service import JobService
from .schemas import ClientCreate, ClientUpdate
from .service import ClientService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["Clients"])


def get_client_service(
    db: Session = Depends(get_db),
    permissions: PermissionSet = Depends(get_current_permissions),
) -> ClientService:
    """Dependency injection for ClientService"""
    return ClientService(db, permissions)


@router.get("")
async def get_clients(
    search: Optional[str] = Query(None),
    service: ClientService = Depends(get_client_service),
):
    """Get all clients, filtered by the caller's field permissions"""
    return service.get_clients(search)


@router.get("/{client_id}")
async def get_client(client_id: int, service: ClientService = Depends(get_client_service)):
    return service.get_client(client_id)


@router.post("", status_code=201)
async def create_client(data: ClientCreate, service: ClientService = Depends(get_client_service)):
    return service.create_client(data)


@router.patch("/{client_id}")
async def update_client(
    client_id: int,
    data: ClientUpdate,
    service: ClientService = Depends(get_client_service),
):
    return service.update_client(client_id, data)


@router.delete("/{client_id}")
async def delete_client(client_id: int, service: ClientService = Depends(get_client_service)):
    return service.delete_client(client_id)


@router.get("/{client_id}/jobs")
async def get_client_jobs(
    client_id: int,
    db: Session = Depends(get_db),
    permissions: PermissionSet = Depends(get_current_permissions),
):
    """Jobs of one client, filtered by the caller's field permissions"""
    return JobService(db, permissions).get_client_jobs(client_id)
