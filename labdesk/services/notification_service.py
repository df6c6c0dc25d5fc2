# labdesk/services/notification_service.py

from uuid import UUID

from loguru import logger
from sqlmodel import select
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from labdesk.core.errors import NotFoundError
from labdesk.core.scoping import AccessScope, apply_scope, can_access
from labdesk.models.notification import Notification
from labdesk.models.user import Profile


async def list_notifications(
    session: AsyncSession,
    user_id: UUID,
    scope: AccessScope,
    unread_only: bool = False,
) -> list[Notification]:
    query = select(Notification).order_by(Notification.created_at.desc())
    query = apply_scope(query, Notification.user_id, scope, user_id)

    if unread_only:
        query = query.where(Notification.read.is_(False))

    result = await session.execute(query)
    return list(result.scalars().all())


async def send(
    session: AsyncSession,
    recipient: UUID | str,
    title: str,
    message: str,
    type: str = "system",
    link: str | None = None,
) -> int:
    """
    Creates one notification, or one per profile when recipient is "all".
    All rows are written in a single commit. Returns the row count.
    """
    if recipient == "all":
        recipients = (await session.execute(select(Profile.id))).scalars().all()
    else:
        if not await session.get(Profile, recipient):
            raise NotFoundError("Recipient not found")
        recipients = [recipient]

    for user_id in recipients:
        session.add(Notification(user_id=user_id, type=type, title=title, message=message, link=link))
    await session.commit()

    logger.info(f"Notification '{title}' sent to {len(recipients)} user(s)")
    return len(recipients)


async def _get_owned(session: AsyncSession, notification_id: UUID, user_id: UUID, scope: AccessScope) -> Notification:
    notification = await session.get(Notification, notification_id)
    if not notification:
        raise NotFoundError("Notification not found")
    if not can_access(notification.user_id, user_id, scope):
        raise PermissionError("Not allowed to modify this notification")
    return notification


async def mark_read(session: AsyncSession, notification_id: UUID, user_id: UUID, scope: AccessScope) -> Notification:
    notification = await _get_owned(session, notification_id, user_id, scope)
    notification.read = True
    session.add(notification)
    await session.commit()
    await session.refresh(notification)
    return notification


async def mark_all_read(session: AsyncSession, user_id: UUID) -> int:
    result = await session.execute(
        update(Notification)
        .where(Notification.user_id == user_id)
        .where(Notification.read.is_(False))
        .values(read=True)
    )
    await session.commit()
    return result.rowcount


async def delete_notification(session: AsyncSession, notification_id: UUID, user_id: UUID, scope: AccessScope) -> None:
    notification = await _get_owned(session, notification_id, user_id, scope)
    await session.delete(notification)
    await session.commit()
