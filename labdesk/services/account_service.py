# labdesk/services/account_service.py

from uuid import UUID

from loguru import logger
from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from labdesk.core.errors import NotFoundError
from labdesk.models.booking import Booking
from labdesk.models.issue import Issue
from labdesk.models.maintenance import MaintenanceLog
from labdesk.models.notice import LabNotice
from labdesk.models.notification import Notification
from labdesk.models.session_log import SessionLog
from labdesk.models.user import User, Profile, UserRole


async def delete_account(session: AsyncSession, user_id: UUID) -> None:
    """
    Removes the identity and everything it owns in one transaction.
    Rows the user only touched (resolved issues, maintenance work,
    notices) are kept with the reference cleared.
    """
    user = await session.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")

    try:
        await session.execute(delete(Notification).where(Notification.user_id == user_id))
        await session.execute(delete(Booking).where(Booking.user_id == user_id))
        await session.execute(delete(SessionLog).where(SessionLog.user_id == user_id))
        await session.execute(delete(Issue).where(Issue.reported_by == user_id))

        await session.execute(
            update(Issue).where(Issue.resolved_by == user_id).values(resolved_by=None)
        )
        await session.execute(
            update(MaintenanceLog).where(MaintenanceLog.performed_by == user_id).values(performed_by=None)
        )
        await session.execute(
            update(LabNotice).where(LabNotice.created_by == user_id).values(created_by=None)
        )

        await session.execute(delete(UserRole).where(UserRole.user_id == user_id))
        await session.execute(delete(Profile).where(Profile.id == user_id))
        await session.execute(delete(User).where(User.id == user_id))
        await session.commit()

    except SQLAlchemyError:
        await session.rollback()
        logger.exception(f"Account deletion failed for {user_id}")
        raise

    logger.info(f"Deleted account {user.email}")
