# labdesk/api/endpoints/maintenance.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from uuid import UUID

from labdesk.api.deps import get_db_session, require_admin_or_staff, to_http, SERVICE_ERRORS
from labdesk.models.enums import MaintenanceType
from labdesk.schemas.maintenance import MaintenanceCreate, MaintenanceRead, MaintenanceUpdate
from labdesk.schemas.user import CurrentUser
from labdesk.services import maintenance_service

# Whole router is staff-facing
router = APIRouter(
    prefix="/api/maintenance",
    tags=["Maintenance"],
    dependencies=[Depends(require_admin_or_staff)],
)


@router.get("/types", response_model=List[str])
async def list_maintenance_types():
    return [t.value for t in MaintenanceType]


@router.get("", response_model=List[MaintenanceRead])
async def list_maintenance(
    computer_id: Optional[UUID] = None,
    session: AsyncSession = Depends(get_db_session),
):
    return await maintenance_service.list_logs(session, computer_id)


@router.post("", response_model=MaintenanceRead, status_code=201)
async def log_maintenance(
    payload: MaintenanceCreate,
    session: AsyncSession = Depends(get_db_session),
    current_user: CurrentUser = Depends(require_admin_or_staff),
):
    try:
        return await maintenance_service.create_log(session, current_user.id, payload.model_dump())
    except SERVICE_ERRORS as e:
        raise to_http(e)


@router.patch("/{log_id}", response_model=MaintenanceRead)
async def update_maintenance(
    log_id: UUID,
    payload: MaintenanceUpdate,
    session: AsyncSession = Depends(get_db_session),
):
    try:
        return await maintenance_service.update_log(session, log_id, payload.model_dump(exclude_unset=True))
    except SERVICE_ERRORS as e:
        raise to_http(e)


@router.delete("/{log_id}")
async def delete_maintenance(
    log_id: UUID,
    session: AsyncSession = Depends(get_db_session),
):
    try:
        await maintenance_service.delete_log(session, log_id)
    except SERVICE_ERRORS as e:
        raise to_http(e)
    return {"detail": "Maintenance log deleted"}
