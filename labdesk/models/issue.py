from sqlmodel import SQLModel, Field, Column
from sqlalchemy import DateTime, ForeignKey, Text, String, Uuid
from sqlalchemy import Enum as SAEnum
from datetime import datetime
import uuid
from typing import Optional

from labdesk.core.clock import utc_now
from labdesk.models.enums import IssueStatus, IssuePriority


class Issue(SQLModel, table=True):
    __tablename__ = "issues"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    computer_id: uuid.UUID = Field(
        sa_column=Column(Uuid, ForeignKey("computers.id", ondelete="CASCADE"), nullable=False)
    )
    reported_by: uuid.UUID = Field(
        sa_column=Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    )

    title: str = Field(sa_column=Column(String, nullable=False))
    description: str = Field(sa_column=Column(Text, nullable=False))

    priority: IssuePriority = Field(
        default=IssuePriority.medium,
        sa_column=Column(SAEnum(IssuePriority, name="issue_priority"), nullable=False)
    )

    status: IssueStatus = Field(
        default=IssueStatus.pending,
        sa_column=Column(SAEnum(IssueStatus, name="issue_status"), nullable=False)
    )

    resolution_notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    resolved_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime, nullable=True))
    resolved_by: Optional[uuid.UUID] = Field(
        default=None,
        sa_column=Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    )

    # The cleanup job keys on this column
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime, nullable=False, index=True)
    )
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime, nullable=False))
