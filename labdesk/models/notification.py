# labdesk/models/notification.py

from sqlmodel import SQLModel, Field
from sqlalchemy import Column, DateTime, ForeignKey, JSON, Uuid
from typing import Optional, Dict, Any
from uuid import UUID, uuid4
from datetime import datetime

from labdesk.core.clock import utc_now


class Notification(SQLModel, table=True):
    __tablename__ = "notifications"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(
        sa_column=Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    )

    # booking / issue / maintenance / system ...
    type: str = Field(default="system")
    title: str
    message: str
    link: Optional[str] = None

    # "metadata" is reserved on declarative classes
    extra: Dict[str, Any] = Field(default={}, sa_column=Column("metadata", JSON))

    read: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime, nullable=False, index=True))
