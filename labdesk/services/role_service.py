# labdesk/services/role_service.py
#
# Server-side role predicates used wherever a decision must not trust
# the client.

from uuid import UUID

from sqlmodel import select
from sqlalchemy.ext.asyncio import AsyncSession

from labdesk.core.errors import NotFoundError
from labdesk.core.scoping import PRIVILEGED_ROLES
from labdesk.models.enums import AppRole
from labdesk.models.user import UserRole


async def get_role(session: AsyncSession, user_id: UUID) -> AppRole | None:
    result = await session.execute(
        select(UserRole.role).where(UserRole.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def has_role(session: AsyncSession, user_id: UUID, role: AppRole) -> bool:
    return await get_role(session, user_id) == role


async def is_admin_or_staff(session: AsyncSession, user_id: UUID) -> bool:
    return await get_role(session, user_id) in PRIVILEGED_ROLES


async def set_role(session: AsyncSession, user_id: UUID, role: AppRole) -> UserRole:
    result = await session.execute(select(UserRole).where(UserRole.user_id == user_id))
    row = result.scalar_one_or_none()
    if not row:
        raise NotFoundError("User not found")

    row.role = role
    session.add(row)
    await session.commit()
    await session.refresh(row)
    return row
