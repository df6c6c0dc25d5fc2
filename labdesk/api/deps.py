# labdesk/api/deps.py

from typing import AsyncGenerator
from uuid import UUID

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from labdesk.core.security import decode_token
from labdesk.core.database import get_session
from labdesk.core.errors import ConflictError, NotFoundError
from labdesk.services.auth_service import get_user_by_id
from labdesk.services.role_service import get_role
from labdesk.models.enums import AppRole
from labdesk.schemas.user import CurrentUser


# ------------------------------------------------------------
# HTTP Bearer Authentication
# ------------------------------------------------------------
bearer_scheme = HTTPBearer(auto_error=True)


# ------------------------------------------------------------
# DB Session
# ------------------------------------------------------------
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    async for session in get_session():
        yield session


# ------------------------------------------------------------
# Get current logged-in user from JWT
# ------------------------------------------------------------
async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    session: AsyncSession = Depends(get_db_session),
) -> CurrentUser:

    token = credentials.credentials

    try:
        payload = decode_token(token)
        user_id = payload.get("sub")

        if not user_id:
            raise HTTPException(401, "Invalid token payload")

        user_id = UUID(user_id)

    except (jwt.PyJWTError, ValueError):
        raise HTTPException(401, "Could not validate credentials")

    user = await get_user_by_id(session, user_id)
    if not user:
        raise HTTPException(401, "User not found")

    # Role is read from the database on every request, never from the token
    role = await get_role(session, user.id) or AppRole.student

    return CurrentUser(id=user.id, email=user.email, role=role)


# ------------------------------------------------------------
# Role-based access control
# ------------------------------------------------------------
def role_required(*allowed_roles: AppRole):
    """
    Enforces that the current user has one of the allowed roles.
    Admin always passes.
    """
    allowed = {AppRole(r) for r in allowed_roles}

    async def checker(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if current_user.role == AppRole.admin:
            return current_user

        if current_user.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied for role '{current_user.role.value}'"
            )

        return current_user

    return checker


# ------------------------------------------------------------
# Service errors -> HTTP
# ------------------------------------------------------------
def to_http(exc: Exception) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(status.HTTP_404_NOT_FOUND, str(exc))
    if isinstance(exc, ConflictError):
        return HTTPException(status.HTTP_409_CONFLICT, str(exc))
    if isinstance(exc, PermissionError):
        return HTTPException(status.HTTP_403_FORBIDDEN, str(exc))
    return HTTPException(status.HTTP_400_BAD_REQUEST, str(exc))


# ------------------------------------------------------------
# Exposed dependencies for routers
# ------------------------------------------------------------
require_admin = role_required(AppRole.admin)
require_admin_or_staff = role_required(AppRole.lab_staff)

# Everything to_http knows how to translate
SERVICE_ERRORS = (ValueError, LookupError, PermissionError)
