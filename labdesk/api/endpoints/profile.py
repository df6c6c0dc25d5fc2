# labdesk/api/endpoints/profile.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from labdesk.api.deps import get_current_user, get_db_session, to_http
from labdesk.schemas.user import CurrentUser, ProfileRead, ProfileUpdate
from labdesk.services.auth_service import get_profile_read, update_profile

router = APIRouter(prefix="/api/profile", tags=["Profile"])


@router.get("/me", response_model=ProfileRead)
async def read_my_profile(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    try:
        return await get_profile_read(session, current_user.id)
    except LookupError as e:
        raise to_http(e)


@router.patch("/me", response_model=ProfileRead)
async def update_my_profile(
    payload: ProfileUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    try:
        return await update_profile(session, current_user.id, payload.model_dump(exclude_unset=True))
    except LookupError as e:
        raise to_http(e)
