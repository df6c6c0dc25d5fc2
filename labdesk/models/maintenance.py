from sqlmodel import SQLModel, Field, Column
from sqlalchemy import DateTime, ForeignKey, Numeric, String, Text, Uuid
from datetime import datetime
from decimal import Decimal
import uuid
from typing import Optional

from labdesk.core.clock import utc_now


class MaintenanceLog(SQLModel, table=True):
    __tablename__ = "maintenance_logs"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    computer_id: uuid.UUID = Field(
        sa_column=Column(Uuid, ForeignKey("computers.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    # Cleared when the performer deletes their account
    performed_by: Optional[uuid.UUID] = Field(
        default=None,
        sa_column=Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    )

    # Free text; the UI offers the MaintenanceType values
    maintenance_type: str = Field(sa_column=Column(String, nullable=False))
    description: str = Field(sa_column=Column(Text, nullable=False))

    parts_replaced: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    cost: Optional[Decimal] = Field(default=None, sa_column=Column(Numeric(10, 2), nullable=True))

    started_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime, nullable=False)
    )
    # Null while the work is still open
    completed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime, nullable=True))

    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime, nullable=False))
