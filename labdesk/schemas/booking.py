# labdesk/schemas/booking.py

from pydantic import BaseModel, model_validator
from typing import List, Optional
from uuid import UUID
from datetime import datetime

from labdesk.models.enums import BookingStatus
from labdesk.schemas.types import UTCDatetime


# ============================================================
# CREATE (any user, for themselves)
# ============================================================
class BookingCreate(BaseModel):
    computer_id: UUID
    start_time: UTCDatetime
    end_time: UTCDatetime
    purpose: Optional[str] = None

    @model_validator(mode="after")
    def check_window(self):
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


# ============================================================
# STATUS CHANGE (Admin / Staff)
# ============================================================
class BookingStatusUpdate(BaseModel):
    status: BookingStatus


# ============================================================
# READ
# ============================================================
class BookingRead(BaseModel):
    id: UUID
    computer_id: UUID
    user_id: UUID
    start_time: datetime
    end_time: datetime
    purpose: Optional[str] = None
    status: BookingStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class BookingCreated(BookingRead):
    # Overlapping pending/confirmed bookings, filled under the "warn" policy
    conflicts: List[UUID] = []
