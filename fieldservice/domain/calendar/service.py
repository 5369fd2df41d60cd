"""Calendar service - assembles calendar views from stored jobs and clients"""

import logging
from datetime import date, datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...calendar import CalendarView, assemble_view, visible_interval
from ...models import Client
from ...permissions import PermissionSet
from ..jobs.service import JobService

logger = logging.getLogger(__name__)


class CalendarService:
    def __init__(self, db: Session, permissions: PermissionSet, now: Optional[datetime] = None):
        self.db = db
        self.permissions = permissions
        self.now = now
        self.jobs = JobService(db, permissions, now)

    def get_view(self, view: str, anchor: Optional[date] = None) -> CalendarView:
        now = self.now or datetime.now()
        anchor = anchor or now.date()
        first, last = visible_interval(anchor, view)
        items = self.jobs.calendar_items(first, last)

        # Client names are hidden, not just unresolved, without job-client visibility
        clients = []
        client_ids = {item.clientId for item in items if item.clientId is not None}
        if self.permissions.canViewJobClient and client_ids:
            rows = self.db.query(Client.id, Client.name).filter(Client.id.in_(client_ids)).all()
            clients = [{"id": row.id, "name": row.name} for row in rows]

        calendar_view = assemble_view(items, clients, anchor, view, now=now)
        logger.debug(
            f"Calendar {view} {calendar_view.start}..{calendar_view.end}: {len(items)} items"
        )
        return calendar_view
