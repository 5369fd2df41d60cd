"""Dashboard router"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_permissions
from ...database import get_db
from ...permissions import PermissionSet
from .service import DashboardService

router = APIRouter(tags=["Dashboard"])


def get_dashboard_service(
    db: Session = Depends(get_db),
    permissions: PermissionSet = Depends(get_current_permissions),
) -> DashboardService:
    """Dependency injection for DashboardService"""
    return DashboardService(db, permissions)


@router.get("/stats")
async def get_stats(service: DashboardService = Depends(get_dashboard_service)):
    """
    Active and completed job counts, client count and this month's income
    (each shown only with the matching permission), plus today's jobs.
    """
    return service.get_stats()
