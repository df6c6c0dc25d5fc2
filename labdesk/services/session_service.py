# labdesk/services/session_service.py

from datetime import timedelta
from uuid import UUID

from loguru import logger
from sqlmodel import select
from sqlalchemy.ext.asyncio import AsyncSession

from labdesk.core.clock import utc_now
from labdesk.core.errors import ConflictError, NotFoundError
from labdesk.core.scoping import AccessScope, apply_scope
from labdesk.models.computer import Computer
from labdesk.models.session_log import SessionLog
from labdesk.models.user import User


def duration_minutes(login_time, logout_time) -> int:
    # Whole minutes, floored
    return (logout_time - login_time) // timedelta(minutes=1)


async def start_session(session: AsyncSession, computer_id: UUID, user_id: UUID) -> SessionLog:
    if not await session.get(Computer, computer_id):
        raise NotFoundError("Computer not found")
    if not await session.get(User, user_id):
        raise NotFoundError("User not found")

    log = SessionLog(computer_id=computer_id, user_id=user_id, login_time=utc_now())
    session.add(log)
    await session.commit()
    await session.refresh(log)

    logger.info(f"Session {log.id} started for user {user_id} on computer {computer_id}")
    return log


async def end_session(session: AsyncSession, session_id: UUID) -> SessionLog:
    log = await session.get(SessionLog, session_id)
    if not log:
        raise NotFoundError("Session not found")

    # Duration is computed once
    if log.logout_time is not None:
        raise ConflictError("Session has already ended")

    logout = utc_now()
    log.logout_time = logout
    log.duration_minutes = duration_minutes(log.login_time, logout)

    session.add(log)
    await session.commit()
    await session.refresh(log)

    logger.info(f"Session {log.id} ended after {log.duration_minutes} min")
    return log


async def list_sessions(
    session: AsyncSession,
    user_id: UUID,
    scope: AccessScope,
    active_only: bool = False,
) -> list[SessionLog]:
    query = select(SessionLog).order_by(SessionLog.login_time.desc())
    query = apply_scope(query, SessionLog.user_id, scope, user_id)

    if active_only:
        query = query.where(SessionLog.logout_time.is_(None))

    result = await session.execute(query)
    return list(result.scalars().all())


async def attendance_summary(session: AsyncSession, user_id: UUID) -> dict:
    """Days attended, hours logged and sessions this month for one user."""
    sessions = await list_sessions(session, user_id, AccessScope.own)

    now = utc_now()
    days = {s.login_time.date() for s in sessions}
    total_minutes = sum(s.duration_minutes or 0 for s in sessions)
    this_month = sum(
        1 for s in sessions
        if (s.login_time.year, s.login_time.month) == (now.year, now.month)
    )

    return {
        "total_days": len(days),
        "total_hours": round(total_minutes / 60),
        "this_month": this_month,
    }
