# labdesk/api/endpoints/users.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from uuid import UUID

from labdesk.api.deps import get_db_session, require_admin, to_http
from labdesk.schemas.user import CurrentUser, ProfileRead, RoleUpdate
from labdesk.services.auth_service import get_profile_read, list_profiles
from labdesk.services.role_service import set_role
from loguru import logger

router = APIRouter(prefix="/api/users", tags=["Users (Admin)"])


# ------------------------------------------------------------
# LIST USERS (profiles + roles)
# ------------------------------------------------------------
@router.get("", response_model=List[ProfileRead])
async def list_users(
    session: AsyncSession = Depends(get_db_session),
    _: CurrentUser = Depends(require_admin),
):
    return await list_profiles(session)


# ------------------------------------------------------------
# CHANGE ROLE
# ------------------------------------------------------------
@router.patch("/{user_id}/role", response_model=ProfileRead)
async def change_role(
    user_id: UUID,
    payload: RoleUpdate,
    session: AsyncSession = Depends(get_db_session),
    current_user: CurrentUser = Depends(require_admin),
):
    try:
        await set_role(session, user_id, payload.role)
        logger.info(f"{current_user.email} set role of {user_id} to {payload.role.value}")
        return await get_profile_read(session, user_id)
    except LookupError as e:
        raise to_http(e)
