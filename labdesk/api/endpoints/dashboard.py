# labdesk/api/endpoints/dashboard.py

from datetime import date
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from labdesk.api.deps import get_current_user, get_db_session, require_admin_or_staff, to_http
from labdesk.schemas.report import DashboardStats, ReportRead
from labdesk.schemas.user import CurrentUser
from labdesk.services.dashboard_service import build_report, dashboard_stats

router = APIRouter(prefix="/api", tags=["Dashboard"])


@router.get("/dashboard/stats", response_model=DashboardStats)
async def get_dashboard_stats(
    session: AsyncSession = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    return await dashboard_stats(session, current_user.id, current_user.role, current_user.scope)


@router.get("/reports", response_model=ReportRead)
async def get_report(
    start: Optional[date] = None,
    end: Optional[date] = None,
    session: AsyncSession = Depends(get_db_session),
    _: CurrentUser = Depends(require_admin_or_staff),
):
    """Analytics over [start, end]; defaults to the last 30 days."""
    try:
        return await build_report(session, start, end)
    except ValueError as e:
        raise to_http(e)
