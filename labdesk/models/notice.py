from sqlmodel import SQLModel, Field, Column
from sqlalchemy import Boolean, DateTime, ForeignKey, Text, Uuid
from sqlalchemy import Enum as SAEnum
from datetime import datetime
import uuid
from typing import Optional

from labdesk.core.clock import utc_now
from labdesk.models.enums import NoticePriority


class LabNotice(SQLModel, table=True):
    __tablename__ = "lab_notices"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    title: str = Field(nullable=False)
    content: str = Field(sa_column=Column(Text, nullable=False))

    priority: NoticePriority = Field(
        default=NoticePriority.normal,
        sa_column=Column(SAEnum(NoticePriority, name="notice_priority"), nullable=False)
    )

    is_active: bool = Field(
        default=True,
        sa_column=Column(Boolean, default=True, nullable=False)
    )
    expires_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime, nullable=True))

    created_by: Optional[uuid.UUID] = Field(
        default=None,
        sa_column=Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    )

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime, nullable=False))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime, nullable=False))
