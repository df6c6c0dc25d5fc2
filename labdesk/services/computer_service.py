# labdesk/services/computer_service.py

from uuid import UUID

from loguru import logger
from sqlmodel import select
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from labdesk.core.clock import utc_now
from labdesk.core.errors import NotFoundError
from labdesk.models.booking import Booking
from labdesk.models.computer import Computer
from labdesk.models.enums import ComputerStatus
from labdesk.models.issue import Issue
from labdesk.models.maintenance import MaintenanceLog
from labdesk.models.session_log import SessionLog
from labdesk.models.software import ComputerSoftware


async def list_computers(session: AsyncSession, status: ComputerStatus | None = None) -> list[Computer]:
    query = select(Computer).order_by(Computer.name)
    if status:
        query = query.where(Computer.status == status)
    result = await session.execute(query)
    return list(result.scalars().all())


async def get_computer(session: AsyncSession, computer_id: UUID) -> Computer:
    computer = await session.get(Computer, computer_id)
    if not computer:
        raise NotFoundError("Computer not found")
    return computer


async def create_computer(session: AsyncSession, data: dict) -> Computer:
    computer = Computer(**data)
    session.add(computer)

    try:
        await session.commit()
        await session.refresh(computer)
    except IntegrityError:
        await session.rollback()
        raise ValueError(f"Computer with system_id '{data.get('system_id')}' already exists")

    logger.info(f"Computer {computer.system_id} added")
    return computer


async def update_computer(session: AsyncSession, computer_id: UUID, changes: dict) -> Computer:
    computer = await get_computer(session, computer_id)

    for field, value in changes.items():
        setattr(computer, field, value)
    computer.updated_at = utc_now()
    session.add(computer)

    try:
        await session.commit()
        await session.refresh(computer)
    except IntegrityError:
        await session.rollback()
        raise ValueError("Failed to update computer (duplicate system_id?)")

    return computer


async def delete_computer(session: AsyncSession, computer_id: UUID) -> None:
    """
    Removes the computer and every row that references it in one
    transaction. Use status 'retired' to keep history instead.
    """
    computer = await get_computer(session, computer_id)

    for model in (ComputerSoftware, Booking, Issue, SessionLog, MaintenanceLog):
        await session.execute(delete(model).where(model.computer_id == computer_id))
    await session.delete(computer)

    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise ValueError("Failed to delete computer")

    logger.info(f"Computer {computer.system_id} deleted")
