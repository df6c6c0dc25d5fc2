# labdesk/api/endpoints/notifications.py

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
from labdesk.schemas.notification import NotificationCreate, NotificationRead, NotificationSent
from labdesk.schemas.user import CurrentUser
from labdesk.services import notification_service

router = APIRouter(prefix="/api/notifications", tags=["Notifications"])


@router.get("", response_model=List[NotificationRead])
async def list_notifications(
    unread_only: bool = False,
    session: AsyncSession = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    return await notification_service.list_notifications(
        session, current_user.id, current_user.scope, unread_only
    )


@router.post("", response_model=NotificationSent, status_code=201)
async def send_notification(
    payload: NotificationCreate,
    session: AsyncSession = Depends(get_db_session),
    _: CurrentUser = Depends(require_admin_or_staff),
):
    try:
        created = await notification_service.send(
            session,
            recipient=payload.user_id,
            title=payload.title,
            message=payload.message,
            type=payload.type,
            link=payload.link,
        )
    except SERVICE_ERRORS as e:
        raise to_http(e)
    return NotificationSent(created=created)


@router.post("/read-all")
async def mark_all_read(
    session: AsyncSession = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    updated = await notification_service.mark_all_read(session, current_user.id)
    return {"updated": updated}


@router.post("/{notification_id}/read", response_model=NotificationRead)
async def mark_read(
    notification_id: UUID,
    session: AsyncSession = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    try:
        return await notification_service.mark_read(
            session, notification_id, current_user.id, current_user.scope
        )
    except SERVICE_ERRORS as e:
        raise to_http(e)


@router.delete("/{notification_id}")
async def delete_notification(
    notification_id: UUID,
    session: AsyncSession = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    try:
        await notification_service.delete_notification(
            session, notification_id, current_user.id, current_user.scope
        )
    except SERVICE_ERRORS as e:
        raise to_http(e)
    return {"detail": "Notification deleted"}
