# labdesk/api/endpoints/software.py

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
from labdesk.schemas.software import (
    InstallationRead,
    InstallRequest,
    SoftwareCreate,
    SoftwareRead,
    SoftwareUpdate,
    SoftwareWithInstallations,
)
from labdesk.schemas.user import CurrentUser
from labdesk.services import software_service

router = APIRouter(prefix="/api/software", tags=["Software"])


@router.get("", response_model=List[SoftwareWithInstallations])
async def list_software(
    session: AsyncSession = Depends(get_db_session),
    _: CurrentUser = Depends(get_current_user),
):
    return await software_service.list_software(session)


@router.post("", response_model=SoftwareRead, status_code=201)
async def create_software(
    payload: SoftwareCreate,
    session: AsyncSession = Depends(get_db_session),
    _: CurrentUser = Depends(require_admin_or_staff),
):
    return await software_service.create_software(session, payload.model_dump())


@router.patch("/{software_id}", response_model=SoftwareRead)
async def update_software(
    software_id: UUID,
    payload: SoftwareUpdate,
    session: AsyncSession = Depends(get_db_session),
    _: CurrentUser = Depends(require_admin_or_staff),
):
    try:
        return await software_service.update_software(
            session, software_id, payload.model_dump(exclude_unset=True)
        )
    except SERVICE_ERRORS as e:
        raise to_http(e)


@router.delete("/{software_id}")
async def delete_software(
    software_id: UUID,
    session: AsyncSession = Depends(get_db_session),
    _: CurrentUser = Depends(require_admin_or_staff),
):
    try:
        await software_service.delete_software(session, software_id)
    except SERVICE_ERRORS as e:
        raise to_http(e)
    return {"detail": "Software deleted"}


# ------------------------------------------------------------
# INSTALLATIONS
# ------------------------------------------------------------
@router.post("/{software_id}/install", response_model=InstallationRead, status_code=201)
async def install_software(
    software_id: UUID,
    payload: InstallRequest,
    session: AsyncSession = Depends(get_db_session),
    _: CurrentUser = Depends(require_admin_or_staff),
):
    try:
        return await software_service.install(session, software_id, payload.computer_id)
    except SERVICE_ERRORS as e:
        raise to_http(e)


@router.delete("/{software_id}/install/{computer_id}")
async def uninstall_software(
    software_id: UUID,
    computer_id: UUID,
    session: AsyncSession = Depends(get_db_session),
    _: CurrentUser = Depends(require_admin_or_staff),
):
    try:
        await software_service.uninstall(session, software_id, computer_id)
    except SERVICE_ERRORS as e:
        raise to_http(e)
    return {"detail": "Software removed from computer"}
