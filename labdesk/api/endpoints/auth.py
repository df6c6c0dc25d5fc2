# labdesk/api/endpoints/auth.py

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from labdesk.schemas.auth import LoginRequest, RegisterRequest, TokenWithUser
from labdesk.schemas.user import ProfileRead, CurrentUser
from labdesk.services.auth_service import (
    authenticate_user,
    create_login_response,
    create_user,
    get_profile_read,
)
from labdesk.core.rate_limiter import limiter, AUTH_RATE_LIMIT
from labdesk.api.deps import get_db_session, get_current_user, to_http

router = APIRouter(prefix="/api/auth", tags=["Auth"])


# -------------------------------------------------------------------
# REGISTER (self sign-up, always a student)
# -------------------------------------------------------------------
@router.post("/register", response_model=ProfileRead, status_code=status.HTTP_201_CREATED)
@limiter.limit(AUTH_RATE_LIMIT)
async def register(
    request: Request,
    payload: RegisterRequest,
    session: AsyncSession = Depends(get_db_session),
):
    try:
        user = await create_user(
            session,
            full_name=payload.full_name,
            email=payload.email,
            password=payload.password,
            department=payload.department,
            phone=payload.phone,
            student_id=payload.student_id,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return await get_profile_read(session, user.id)


# -------------------------------------------------------------------
# LOGIN
# -------------------------------------------------------------------
@router.post("/login", response_model=TokenWithUser)
@limiter.limit(AUTH_RATE_LIMIT)
async def login(
    request: Request,
    payload: LoginRequest,
    session: AsyncSession = Depends(get_db_session),
):
    user = await authenticate_user(session, payload.email, payload.password)

    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return await create_login_response(user, session)


# -------------------------------------------------------------------
# WHO AM I
# -------------------------------------------------------------------
@router.get("/me", response_model=ProfileRead)
async def me(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    try:
        return await get_profile_read(session, current_user.id)
    except LookupError as e:
        raise to_http(e)
