# labdesk/services/software_service.py

from collections import defaultdict
from uuid import UUID

from loguru import logger
from sqlmodel import select
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from labdesk.core.clock import utc_now
from labdesk.core.errors import NotFoundError
from labdesk.models.computer import Computer
from labdesk.models.software import ComputerSoftware, Software
from labdesk.schemas.software import InstalledOn, SoftwareWithInstallations


async def list_software(session: AsyncSession) -> list[SoftwareWithInstallations]:
    """Every title with the computers it is installed on."""
    software = (await session.execute(select(Software).order_by(Software.name))).scalars().all()

    installs = await session.execute(
        select(ComputerSoftware.id, ComputerSoftware.software_id, Computer.id, Computer.name, Computer.system_id)
        .join(Computer, Computer.id == ComputerSoftware.computer_id)
    )
    by_software = defaultdict(list)
    for install_id, software_id, computer_id, name, system_id in installs.all():
        by_software[software_id].append(
            InstalledOn(installation_id=install_id, computer_id=computer_id, name=name, system_id=system_id)
        )

    items = []
    for sw in software:
        item = SoftwareWithInstallations.model_validate(sw)
        item.installed_on = by_software.get(sw.id, [])
        item.installation_count = len(item.installed_on)
        items.append(item)
    return items


async def get_software(session: AsyncSession, software_id: UUID) -> Software:
    sw = await session.get(Software, software_id)
    if not sw:
        raise NotFoundError("Software not found")
    return sw


async def create_software(session: AsyncSession, data: dict) -> Software:
    sw = Software(**data)
    session.add(sw)
    await session.commit()
    await session.refresh(sw)
    logger.info(f"Software '{sw.name}' added")
    return sw


async def update_software(session: AsyncSession, software_id: UUID, changes: dict) -> Software:
    sw = await get_software(session, software_id)
    for field, value in changes.items():
        setattr(sw, field, value)
    sw.updated_at = utc_now()

    session.add(sw)
    await session.commit()
    await session.refresh(sw)
    return sw


async def delete_software(session: AsyncSession, software_id: UUID) -> None:
    # Join rows go first, same transaction
    sw = await get_software(session, software_id)
    await session.execute(delete(ComputerSoftware).where(ComputerSoftware.software_id == software_id))
    await session.delete(sw)
    await session.commit()
    logger.info(f"Software '{sw.name}' deleted")


async def install(session: AsyncSession, software_id: UUID, computer_id: UUID) -> ComputerSoftware:
    await get_software(session, software_id)
    if not await session.get(Computer, computer_id):
        raise NotFoundError("Computer not found")

    existing = await session.execute(
        select(ComputerSoftware)
        .where(ComputerSoftware.software_id == software_id)
        .where(ComputerSoftware.computer_id == computer_id)
    )
    if existing.scalar_one_or_none():
        raise ValueError("Software is already assigned to this computer")

    link = ComputerSoftware(software_id=software_id, computer_id=computer_id)
    session.add(link)

    try:
        await session.commit()
        await session.refresh(link)
    except IntegrityError:
        await session.rollback()
        raise ValueError("Software is already assigned to this computer")

    return link


async def uninstall(session: AsyncSession, software_id: UUID, computer_id: UUID) -> None:
    result = await session.execute(
        select(ComputerSoftware)
        .where(ComputerSoftware.software_id == software_id)
        .where(ComputerSoftware.computer_id == computer_id)
    )
    link = result.scalar_one_or_none()
    if not link:
        raise NotFoundError("Software is not assigned to this computer")

    await session.delete(link)
    await session.commit()
