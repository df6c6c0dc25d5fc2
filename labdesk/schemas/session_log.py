from pydantic import BaseModel
from typing import Optional
from uuid import UUID
from datetime import datetime


class SessionStart(BaseModel):
    computer_id: UUID
    user_id: UUID


class SessionRead(BaseModel):
    id: UUID
    computer_id: UUID
    user_id: UUID
    login_time: datetime
    logout_time: Optional[datetime] = None
    duration_minutes: Optional[int] = None

    class Config:
        from_attributes = True


class AttendanceSummary(BaseModel):
    total_days: int
    total_hours: int
    this_month: int
