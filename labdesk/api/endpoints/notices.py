# labdesk/api/endpoints/notices.py

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
from labdesk.schemas.notice import NoticeCreate, NoticeRead, NoticeUpdate
from labdesk.schemas.user import CurrentUser
from labdesk.services import notice_service

router = APIRouter(prefix="/api/notices", tags=["Notices"])


@router.get("", response_model=List[NoticeRead])
async def list_notices(
    include_inactive: bool = False,
    session: AsyncSession = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    # Hidden notices are only listed for admin/staff
    include_inactive = include_inactive and current_user.is_admin_or_staff
    return await notice_service.list_notices(session, include_inactive)


@router.post("", response_model=NoticeRead, status_code=201)
async def create_notice(
    payload: NoticeCreate,
    session: AsyncSession = Depends(get_db_session),
    current_user: CurrentUser = Depends(require_admin_or_staff),
):
    return await notice_service.create_notice(session, current_user.id, payload.model_dump())


@router.patch("/{notice_id}", response_model=NoticeRead)
async def update_notice(
    notice_id: UUID,
    payload: NoticeUpdate,
    session: AsyncSession = Depends(get_db_session),
    _: CurrentUser = Depends(require_admin_or_staff),
):
    try:
        return await notice_service.update_notice(session, notice_id, payload.model_dump(exclude_unset=True))
    except SERVICE_ERRORS as e:
        raise to_http(e)


@router.delete("/{notice_id}")
async def delete_notice(
    notice_id: UUID,
    session: AsyncSession = Depends(get_db_session),
    _: CurrentUser = Depends(require_admin_or_staff),
):
    try:
        await notice_service.delete_notice(session, notice_id)
    except SERVICE_ERRORS as e:
        raise to_http(e)
    return {"detail": "Notice deleted"}
