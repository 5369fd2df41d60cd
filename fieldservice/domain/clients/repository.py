"""Client repository - Database operations for clients"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Client


class ClientRepository:
    """Repository for client database operations"""

    @staticmethod
    def get_clients(db: Session, search: Optional[str] = None) -> list[Client]:
        """Get all clients, optionally filtered by name/email"""
        query = db.query(Client)
        if search:
            search_term = f"%{search.lower()}%"
            query = query.filter((Client.name.ilike(search_term)) | (Client.email.ilike(search_term)))
        return query.order_by(Client.name).all()

    @staticmethod
    def get_client_by_id(db: Session, client_id: int) -> Optional[Client]:
        return db.query(Client).filter(Client.id == client_id).first()

    @staticmethod
    def create_client(db: Session, **client_data) -> Client:
        client = Client(**client_data)
        db.add(client)
        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def update_client(db: Session, client: Client, **updates) -> Client:
        """Update a client with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(client, key):
                setattr(client, key, value)

        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def delete_client(db: Session, client: Client) -> None:
        db.delete(client)
        db.commit()
