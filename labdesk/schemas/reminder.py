from pydantic import BaseModel
from typing import List, Literal, Optional
from uuid import UUID
from datetime import date, datetime

Urgency = Literal["critical", "warning", "info"]


class BookingReminder(BaseModel):
    id: UUID
    computer_name: str
    start_time: datetime
    end_time: datetime
    purpose: Optional[str] = None
    status: str
    hours_until: int
    urgency: Urgency


class LicenseReminder(BaseModel):
    id: UUID
    name: str
    vendor: str
    license_expiry: date
    days_until: int
    urgency: Urgency


class MaintenanceReminder(BaseModel):
    computer_id: UUID
    computer_name: str
    status: str
    last_maintenance: Optional[datetime] = None
    days_since_last_maintenance: Optional[int] = None


class Reminders(BaseModel):
    bookings: List[BookingReminder] = []
    licenses: List[LicenseReminder] = []
    maintenance: List[MaintenanceReminder] = []
    total: int = 0
