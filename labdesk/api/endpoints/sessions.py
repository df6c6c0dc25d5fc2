# labdesk/api/endpoints/sessions.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from uuid import UUID

from labdesk.api.deps import (
    get_current_user,
    get_db_session,
    require_admin_or_staff,
    to_http,
    SERVICE_ERRORS,
)
from labdesk.schemas.session_log import AttendanceSummary, SessionRead, SessionStart
from labdesk.schemas.user import CurrentUser
from labdesk.services import session_service

router = APIRouter(prefix="/api/sessions", tags=["Sessions"])


@router.get("", response_model=List[SessionRead])
async def list_sessions(
    active_only: bool = False,
    session: AsyncSession = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    return await session_service.list_sessions(session, current_user.id, current_user.scope, active_only)


@router.get("/attendance", response_model=AttendanceSummary)
async def my_attendance(
    session: AsyncSession = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    return await session_service.attendance_summary(session, current_user.id)


# ------------------------------------------------------------
# START / END (Admin / Staff)
# ------------------------------------------------------------
@router.post("", response_model=SessionRead, status_code=201)
async def start_session(
    payload: SessionStart,
    session: AsyncSession = Depends(get_db_session),
    _: CurrentUser = Depends(require_admin_or_staff),
):
    try:
        return await session_service.start_session(session, payload.computer_id, payload.user_id)
    except SERVICE_ERRORS as e:
        raise to_http(e)


@router.post("/{session_id}/end", response_model=SessionRead)
async def end_session(
    session_id: UUID,
    session: AsyncSession = Depends(get_db_session),
    _: CurrentUser = Depends(require_admin_or_staff),
):
    try:
        return await session_service.end_session(session, session_id)
    except SERVICE_ERRORS as e:
        raise to_http(e)
