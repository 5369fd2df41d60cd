"""Calendar router"""

from datetime import date
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_permissions
from ...calendar import CalendarView
from ...database import get_db
from ...permissions import PermissionSet
from .service import CalendarService

router = APIRouter(prefix="/calendar", tags=["Calendar"])


def get_calendar_service(
    db: Session = Depends(get_db),
    permissions: PermissionSet = Depends(get_current_permissions),
) -> CalendarService:
    """Dependency injection for CalendarService"""
    return CalendarService(db, permissions)


@router.get("", response_model=CalendarView)
async def get_calendar(
    view: Literal["day", "week", "month"] = Query("week"),
    anchor: Optional[date] = Query(None, alias="date", description="Anchor date, defaults to today"),
    service: CalendarService = Depends(get_calendar_service),
):
    """
    Assembled calendar page: visible dates, per-day job segments (with
    start/middle/end roles and progress) and, for day/week views, hourly rows.
    """
    return service.get_view(view, anchor)
