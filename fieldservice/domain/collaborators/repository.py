"""Collaborator repository - Database operations for roles and collaborators"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Collaborator, Role


class CollaboratorRepository:
    """Repository for collaborator and role database operations"""

    @staticmethod
    def get_roles(db: Session) -> list[Role]:
        return db.query(Role).order_by(Role.name).all()

    @staticmethod
    def get_role_by_name(db: Session, name: str) -> Optional[Role]:
        return db.query(Role).filter(Role.name == name).first()

    @staticmethod
    def get_roles_by_ids(db: Session, role_ids: list[int]) -> list[Role]:
        return db.query(Role).filter(Role.id.in_(role_ids)).all()

    @staticmethod
    def get_collaborators(db: Session) -> list[Collaborator]:
        return db.query(Collaborator).order_by(Collaborator.name).all()

    @staticmethod
    def get_by_username(db: Session, username: str) -> Optional[Collaborator]:
        return db.query(Collaborator).filter(Collaborator.username == username).first()

    @staticmethod
    def count_collaborators(db: Session) -> int:
        return db.query(Collaborator).count()

    @staticmethod
    def add(db: Session, record):
        db.add(record)
        db.commit()
        db.refresh(record)
        return record

    @staticmethod
    def get_role_by_id(db: Session, role_id: int) -> Optional[Role]:
        return db.query(Role).filter(Role.id == role_id).first()

    @staticmethod
    def get_by_id(db: Session, collaborator_id: int) -> Optional[Collaborator]:
        return db.query(Collaborator).filter(Collaborator.id == collaborator_id).first()

    @staticmethod
    def get_collaborators_with_role(db: Session, role_id: int) -> list[Collaborator]:
        """role_ids is a JSON list, so membership is checked in Python"""
        return [c for c in CollaboratorRepository.get_collaborators(db) if role_id in (c.role_ids or [])]

    @staticmethod
    def save(db: Session, record):
        db.commit()
        db.refresh(record)
        return record

    @staticmethod
    def delete(db: Session, record) -> None:
        db.delete(record)
        db.commit()
