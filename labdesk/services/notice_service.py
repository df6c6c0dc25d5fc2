from uuid import UUID

from sqlmodel import select
from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession

from labdesk.core.clock import utc_now
from labdesk.core.errors import NotFoundError
from labdesk.models.notice import LabNotice


def is_visible(notice: LabNotice, now=None) -> bool:
    now = now or utc_now()
    return notice.is_active and (notice.expires_at is None or notice.expires_at > now)


async def list_notices(session: AsyncSession, include_inactive: bool = False) -> list[LabNotice]:
    query = select(LabNotice).order_by(LabNotice.created_at.desc())

    if not include_inactive:
        query = query.where(LabNotice.is_active.is_(True)).where(
            or_(LabNotice.expires_at.is_(None), LabNotice.expires_at > utc_now())
        )

    result = await session.execute(query)
    return list(result.scalars().all())


async def get_notice(session: AsyncSession, notice_id: UUID) -> LabNotice:
    notice = await session.get(LabNotice, notice_id)
    if not notice:
        raise NotFoundError("Notice not found")
    return notice


async def create_notice(session: AsyncSession, author_id: UUID, data: dict) -> LabNotice:
    notice = LabNotice(created_by=author_id, **data)
    session.add(notice)
    await session.commit()
    await session.refresh(notice)
    return notice


async def update_notice(session: AsyncSession, notice_id: UUID, changes: dict) -> LabNotice:
    notice = await get_notice(session, notice_id)
    for field, value in changes.items():
        setattr(notice, field, value)
    notice.updated_at = utc_now()

    session.add(notice)
    await session.commit()
    await session.refresh(notice)
    return notice


async def delete_notice(session: AsyncSession, notice_id: UUID) -> None:
    notice = await get_notice(session, notice_id)
    await session.delete(notice)
    await session.commit()
