# labdesk/api/endpoints/computers.py

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
from labdesk.models.enums import ComputerStatus
from labdesk.schemas.computer import ComputerCreate, ComputerRead, ComputerUpdate
from labdesk.schemas.user import CurrentUser
from labdesk.services import computer_service

router = APIRouter(prefix="/api/computers", tags=["Computers"])


# ------------------------------------------------------------
# READ (any signed-in user)
# ------------------------------------------------------------
@router.get("", response_model=List[ComputerRead])
async def list_computers(
    status: Optional[ComputerStatus] = None,
    session: AsyncSession = Depends(get_db_session),
    _: CurrentUser = Depends(get_current_user),
):
    return await computer_service.list_computers(session, status)


@router.get("/{computer_id}", response_model=ComputerRead)
async def get_computer(
    computer_id: UUID,
    session: AsyncSession = Depends(get_db_session),
    _: CurrentUser = Depends(get_current_user),
):
    try:
        return await computer_service.get_computer(session, computer_id)
    except SERVICE_ERRORS as e:
        raise to_http(e)


# ------------------------------------------------------------
# WRITE (Admin / Staff)
# ------------------------------------------------------------
@router.post("", response_model=ComputerRead, status_code=201)
async def create_computer(
    payload: ComputerCreate,
    session: AsyncSession = Depends(get_db_session),
    _: CurrentUser = Depends(require_admin_or_staff),
):
    try:
        return await computer_service.create_computer(session, payload.model_dump())
    except SERVICE_ERRORS as e:
        raise to_http(e)


@router.patch("/{computer_id}", response_model=ComputerRead)
async def update_computer(
    computer_id: UUID,
    payload: ComputerUpdate,
    session: AsyncSession = Depends(get_db_session),
    _: CurrentUser = Depends(require_admin_or_staff),
):
    try:
        return await computer_service.update_computer(
            session, computer_id, payload.model_dump(exclude_unset=True)
        )
    except SERVICE_ERRORS as e:
        raise to_http(e)


@router.delete("/{computer_id}")
async def delete_computer(
    computer_id: UUID,
    session: AsyncSession = Depends(get_db_session),
    _: CurrentUser = Depends(require_admin_or_staff),
):
    try:
        await computer_service.delete_computer(session, computer_id)
    except SERVICE_ERRORS as e:
        raise to_http(e)
    return {"detail": "Computer deleted"}
