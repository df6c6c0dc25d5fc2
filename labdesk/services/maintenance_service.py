from uuid import UUID

from loguru import logger
from sqlmodel import select
from sqlalchemy.ext.asyncio import AsyncSession

from labdesk.core.clock import utc_now
from labdesk.core.errors import NotFoundError
from labdesk.models.computer import Computer
from labdesk.models.maintenance import MaintenanceLog
from labdesk.models.user import Profile
from labdesk.schemas.maintenance import MaintenanceRead


def _read(log: MaintenanceLog, performer_name: str | None) -> MaintenanceRead:
    data = MaintenanceRead.model_validate(log)
    data.performer_name = performer_name or "Unknown"
    return data


async def list_logs(session: AsyncSession, computer_id: UUID | None = None) -> list[MaintenanceRead]:
    query = (
        select(MaintenanceLog, Profile.full_name)
        .join(Profile, Profile.id == MaintenanceLog.performed_by, isouter=True)
        .order_by(MaintenanceLog.started_at.desc())
    )
    if computer_id:
        query = query.where(MaintenanceLog.computer_id == computer_id)

    result = await session.execute(query)
    return [_read(log, name) for log, name in result.all()]


async def _get(session: AsyncSession, log_id: UUID) -> MaintenanceLog:
    log = await session.get(MaintenanceLog, log_id)
    if not log:
        raise NotFoundError("Maintenance log not found")
    return log


async def _performer_name(session: AsyncSession, user_id: UUID | None) -> str | None:
    if not user_id:
        return None
    profile = await session.get(Profile, user_id)
    return profile.full_name if profile else None


async def create_log(session: AsyncSession, performer_id: UUID, data: dict) -> MaintenanceRead:
    if not await session.get(Computer, data["computer_id"]):
        raise NotFoundError("Computer not found")

    if data.get("started_at") is None:
        data["started_at"] = utc_now()
    completed_at = data.get("completed_at")
    if completed_at and completed_at < data["started_at"]:
        raise ValueError("completed_at must not be before started_at")

    log = MaintenanceLog(performed_by=performer_id, **data)
    session.add(log)
    await session.commit()
    await session.refresh(log)

    logger.info(f"Maintenance '{log.maintenance_type}' logged on computer {log.computer_id}")
    return _read(log, await _performer_name(session, performer_id))


async def update_log(session: AsyncSession, log_id: UUID, changes: dict) -> MaintenanceRead:
    log = await _get(session, log_id)
    for field, value in changes.items():
        setattr(log, field, value)

    if log.completed_at and log.completed_at < log.started_at:
        raise ValueError("completed_at must not be before started_at")

    session.add(log)
    await session.commit()
    await session.refresh(log)
    return _read(log, await _performer_name(session, log.performed_by))


async def delete_log(session: AsyncSession, log_id: UUID) -> None:
    log = await _get(session, log_id)
    await session.delete(log)
    await session.commit()
