from pydantic import BaseModel
from typing import Dict, List, Optional
from datetime import date


class DashboardStats(BaseModel):
    total_computers: int
    available_computers: int
    in_use_computers: int
    maintenance_computers: int
    total_bookings: int
    pending_bookings: int
    confirmed_bookings: int
    total_issues: int
    pending_issues: int
    resolved_issues: int
    # Admin only
    total_users: Optional[int] = None
    total_software: Optional[int] = None


class DailyCount(BaseModel):
    date: date
    count: int


class ComputerUsage(BaseModel):
    computer_id: str
    computer: str
    hours: int
    sessions: int


class ReportRead(BaseModel):
    start: date
    end: date
    bookings_per_day: List[DailyCount]
    issues_by_status: Dict[str, int]
    usage_by_computer: List[ComputerUsage]
    computers_by_status: Dict[str, int]
