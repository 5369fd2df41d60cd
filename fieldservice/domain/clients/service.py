"""Client service - Business logic for client operations"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...auth import require_permission
from ...models import Client
from ...permissions import PermissionSet, filter_client_data
from .repository import ClientRepository
from .schemas import ClientCreate, ClientResponse, ClientUpdate

logger = logging.getLogger(__name__)

# API field name -> model attribute
FIELD_MAP = {
    "name": "name",
    "type": "type",
    "phone": "phone",
    "email": "email",
    "address": "address",
    "geoLocation": "geo_location",
    "notes": "notes",
}


def serialize_client(client: Client) -> ClientResponse:
    return ClientResponse(
        id=client.id,
        name=client.name,
        type=client.type,
        phone=client.phone,
        email=client.email,
        address=client.address,
        geoLocation=client.geo_location,
        notes=client.notes,
        createdAt=client.created_at,
    )


class ClientService:
    """Service layer for client business logic"""

    def __init__(self, db: Session, permissions: PermissionSet):
        self.db = db
        self.permissions = permissions
        self.repo = ClientRepository()

    def project(self, client: Client) -> dict:
        """Client as the caller is allowed to see it"""
        return filter_client_data(self.permissions, serialize_client(client).model_dump(mode="json"))

    def get_clients(self, search: Optional[str] = None) -> list[dict]:
        require_permission(self.permissions, "canViewClients")
        return [self.project(c) for c in self.repo.get_clients(self.db, search)]

    def get_client_or_404(self, client_id: int) -> Client:
        client = self.repo.get_client_by_id(self.db, client_id)
        if not client:
            raise HTTPException(status_code=404, detail="Client not found")
        return client

    def get_client(self, client_id: int) -> dict:
        require_permission(self.permissions, "canViewClients")
        return self.project(self.get_client_or_404(client_id))

    def create_client(self, data: ClientCreate) -> dict:
        require_permission(self.permissions, "canCreateClients")
        values = {FIELD_MAP[k]: v for k, v in data.model_dump().items()}
        client = self.repo.create_client(self.db, **values)
        logger.info(f"Created client {client.id} ({client.name})")
        return self.project(client)

    def update_client(self, client_id: int, data: ClientUpdate) -> dict:
        require_permission(self.permissions, "canEditClients")
        client = self.get_client_or_404(client_id)
        updates = {FIELD_MAP[k]: v for k, v in data.model_dump(exclude_unset=True).items()}
        return self.project(self.repo.update_client(self.db, client, **updates))

    def delete_client(self, client_id: int) -> dict:
        require_permission(self.permissions, "canDeleteClients")
        client = self.get_client_or_404(client_id)
        if client.jobs:
            raise HTTPException(
                status_code=400,
                detail=f"Client has {len(client.jobs)} job(s); delete or reassign them first",
            )
        self.repo.delete_client(self.db, client)
        logger.info(f"Deleted client {client_id}")
        return {"message": "Client deleted"}
