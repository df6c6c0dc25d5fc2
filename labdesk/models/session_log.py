from sqlmodel import SQLModel, Field, Column
from sqlalchemy import DateTime, ForeignKey, Integer, Uuid
from datetime import datetime
import uuid
from typing import Optional

from labdesk.core.clock import utc_now


class SessionLog(SQLModel, table=True):
    __tablename__ = "session_logs"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    computer_id: uuid.UUID = Field(
        sa_column=Column(Uuid, ForeignKey("computers.id", ondelete="CASCADE"), nullable=False)
    )
    user_id: uuid.UUID = Field(
        sa_column=Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    )

    login_time: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime, nullable=False)
    )

    # Both set together when the session ends
    logout_time: Optional[datetime] = Field(default=None, sa_column=Column(DateTime, nullable=True))
    duration_minutes: Optional[int] = Field(default=None, sa_column=Column(Integer, nullable=True))

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime, nullable=False))
