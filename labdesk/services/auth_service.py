# labdesk/services/auth_service.py

from sqlmodel import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from loguru import logger
import uuid

from labdesk.core.clock import utc_now
from labdesk.core.config import settings
from labdesk.core.errors import NotFoundError
from labdesk.models.enums import AppRole
from labdesk.models.user import User, Profile, UserRole
from labdesk.core.security import (
    hash_password,
    verify_password,
    create_access_token,
)
from labdesk.schemas.auth import TokenWithUser
from labdesk.schemas.user import ProfileRead


# ============================================================================
# FETCH USER BY EMAIL
# ============================================================================
async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    result = await session.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


# ============================================================================
# FETCH USER BY ID
# ============================================================================
async def get_user_by_id(session: AsyncSession, user_id: uuid.UUID) -> User | None:
    result = await session.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


# ============================================================================
# CREATE USER (identity + profile + role in one commit)
# ============================================================================
async def create_user(
    session: AsyncSession,
    full_name: str,
    email: str,
    password: str,
    role: AppRole = AppRole.student,
    department: str | None = None,
    phone: str | None = None,
    student_id: str | None = None,
) -> User:

    email = email.lower()
    user = User(
        id=uuid.uuid4(),
        email=email,
        password_hash=hash_password(password),
    )
    session.add(user)

    try:
        # Parent row must exist before the FK-bound rows on strict backends
        await session.flush()

        session.add(Profile(
            id=user.id,
            email=email,
            full_name=full_name,
            department=department,
            phone=phone,
            student_id=student_id,
        ))
        session.add(UserRole(user_id=user.id, role=role))
        await session.commit()
        await session.refresh(user)
        logger.info(f"Created {role.value} account {email}")
        return user

    except IntegrityError:
        await session.rollback()
        raise ValueError("User with this email already exists")


# ============================================================================
# AUTHENTICATE
# ============================================================================
async def authenticate_user(session: AsyncSession, email: str, password: str) -> User | None:
    user = await get_user_by_email(session, email)
    if not user:
        return None

    if not verify_password(password, user.password_hash):
        return None

    return user


# ============================================================================
# PROFILE + ROLE
# ============================================================================
async def get_profile_read(session: AsyncSession, user_id: uuid.UUID) -> ProfileRead:
    result = await session.execute(
        select(Profile, UserRole.role)
        .join(UserRole, UserRole.user_id == Profile.id, isouter=True)
        .where(Profile.id == user_id)
    )
    row = result.first()
    if not row:
        raise NotFoundError("Profile not found")

    profile, role = row
    data = ProfileRead.model_validate(profile)
    data.role = role or AppRole.student
    return data


async def update_profile(session: AsyncSession, user_id: uuid.UUID, changes: dict) -> ProfileRead:
    profile = await session.get(Profile, user_id)
    if not profile:
        raise NotFoundError("Profile not found")

    for field, value in changes.items():
        setattr(profile, field, value)
    profile.updated_at = utc_now()

    session.add(profile)
    await session.commit()
    return await get_profile_read(session, user_id)


async def list_profiles(session: AsyncSession) -> list[ProfileRead]:
    result = await session.execute(
        select(Profile, UserRole.role)
        .join(UserRole, UserRole.user_id == Profile.id, isouter=True)
        .order_by(Profile.created_at.desc())
    )
    users = []
    for profile, role in result.all():
        data = ProfileRead.model_validate(profile)
        data.role = role or AppRole.student
        users.append(data)
    return users


# ============================================================================
# LOGIN RESPONSE
# ============================================================================
async def create_login_response(user: User, session: AsyncSession) -> TokenWithUser:
    profile = await get_profile_read(session, user.id)

    token = create_access_token(
        subject=str(user.id),
        data={"role": profile.role.value},
    )

    return TokenWithUser(
        access_token=token,
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        user=profile,
    )


# ============================================================================
# CHANGE PASSWORD
# ============================================================================
async def change_password(session: AsyncSession, user_id: uuid.UUID, old_password: str, new_password: str):
    user = await get_user_by_id(session, user_id)
    if not user:
        raise NotFoundError("User not found")

    if not verify_password(old_password, user.password_hash):
        raise ValueError("Old password incorrect")

    if old_password == new_password:
        raise ValueError("New password must be different")

    user.password_hash = hash_password(new_password)
    session.add(user)
    await session.commit()
