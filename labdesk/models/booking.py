# labdesk/models/booking.py

from sqlmodel import SQLModel, Field, Column
from sqlalchemy import DateTime, ForeignKey, Text, Uuid
from sqlalchemy import Enum as SAEnum
from datetime import datetime
import uuid
from typing import Optional

from labdesk.core.clock import utc_now
from labdesk.models.enums import BookingStatus


class Booking(SQLModel, table=True):
    __tablename__ = "bookings"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    computer_id: uuid.UUID = Field(
        sa_column=Column(Uuid, ForeignKey("computers.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    user_id: uuid.UUID = Field(
        sa_column=Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    )

    start_time: datetime = Field(sa_column=Column(DateTime, nullable=False))
    end_time: datetime = Field(sa_column=Column(DateTime, nullable=False))

    purpose: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    status: BookingStatus = Field(
        default=BookingStatus.pending,
        sa_column=Column(SAEnum(BookingStatus, name="booking_status"), nullable=False)
    )

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime, nullable=False))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime, nullable=False))
