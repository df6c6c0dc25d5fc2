# labdesk/api/endpoints/bookings.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from uuid import UUID

from labdesk.api.deps import (
    get_current_user,
    get_db_session,
    require_admin_or_staff,
    to_http,
    SERVICE_ERRORS,
)
from labdesk.models.enums import BookingStatus
from labdesk.schemas.booking import BookingCreate, BookingCreated, BookingRead, BookingStatusUpdate
from labdesk.schemas.user import CurrentUser
from labdesk.services import booking_service

router = APIRouter(prefix="/api/bookings", tags=["Bookings"])


# ============================================================
# CREATE (for the caller, always pending)
# ============================================================
@router.post("", response_model=BookingCreated, status_code=201)
async def create_booking(
    payload: BookingCreate,
    session: AsyncSession = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    try:
        booking, conflicts = await booking_service.create_booking(
            session,
            user_id=current_user.id,
            computer_id=payload.computer_id,
            start_time=payload.start_time,
            end_time=payload.end_time,
            purpose=payload.purpose,
        )
    except SERVICE_ERRORS as e:
        raise to_http(e)

    result = BookingCreated.model_validate(booking)
    result.conflicts = conflicts
    return result


# ============================================================
# LIST (own rows, or all for admin/staff)
# ============================================================
@router.get("", response_model=List[BookingRead])
async def list_bookings(
    status: Optional[BookingStatus] = None,
    session: AsyncSession = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    return await booking_service.list_bookings(session, current_user.id, current_user.scope, status)


@router.get("/{booking_id}", response_model=BookingRead)
async def get_booking(
    booking_id: UUID,
    session: AsyncSession = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    try:
        return await booking_service.get_booking(session, booking_id, current_user.id, current_user.scope)
    except SERVICE_ERRORS as e:
        raise to_http(e)


# ============================================================
# STATUS TRANSITION (Admin / Staff)
# ============================================================
@router.patch("/{booking_id}/status", response_model=BookingRead)
async def change_booking_status(
    booking_id: UUID,
    payload: BookingStatusUpdate,
    session: AsyncSession = Depends(get_db_session),
    _: CurrentUser = Depends(require_admin_or_staff),
):
    try:
        return await booking_service.change_status(session, booking_id, payload.status)
    except SERVICE_ERRORS as e:
        raise to_http(e)
