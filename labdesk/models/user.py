# labdesk/models/user.py

from sqlmodel import SQLModel, Field, Column
from sqlalchemy import DateTime, ForeignKey, String, Uuid
from sqlalchemy import Enum as SAEnum
from datetime import datetime
import uuid
from typing import Optional

from labdesk.core.clock import utc_now
from labdesk.models.enums import AppRole


# ------------------------------------------------------------
# 1. AUTH IDENTITY
# ------------------------------------------------------------
class User(SQLModel, table=True):
    __tablename__ = "users"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    email: str = Field(nullable=False, index=True, unique=True)
    password_hash: str = Field(nullable=False)

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime, nullable=False)
    )


# ------------------------------------------------------------
# 2. PROFILE (one per identity, same id)
# ------------------------------------------------------------
class Profile(SQLModel, table=True):
    __tablename__ = "profiles"

    id: uuid.UUID = Field(primary_key=True, foreign_key="users.id")

    email: str = Field(nullable=False)
    full_name: str = Field(nullable=False)

    department: Optional[str] = Field(default=None, sa_column=Column(String, nullable=True))
    phone: Optional[str] = Field(default=None, sa_column=Column(String, nullable=True))
    student_id: Optional[str] = Field(default=None, sa_column=Column(String, nullable=True))
    avatar_url: Optional[str] = Field(default=None, sa_column=Column(String, nullable=True))

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime, nullable=False))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime, nullable=False))


# ------------------------------------------------------------
# 3. ROLE (one row per user, drives every access decision)
# ------------------------------------------------------------
class UserRole(SQLModel, table=True):
    __tablename__ = "user_roles"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    user_id: uuid.UUID = Field(
        sa_column=Column(Uuid, ForeignKey("users.id"), nullable=False, unique=True)
    )

    role: AppRole = Field(
        default=AppRole.student,
        sa_column=Column(SAEnum(AppRole, name="app_role"), nullable=False)
    )

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime, nullable=False))
