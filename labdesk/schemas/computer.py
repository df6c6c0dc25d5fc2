from pydantic import BaseModel, field_validator
from typing import Optional
from uuid import UUID
from datetime import date, datetime

from labdesk.models.enums import ComputerStatus
from labdesk.schemas.types import not_null


class ComputerCreate(BaseModel):
    system_id: str
    name: str
    location: Optional[str] = None
    processor: Optional[str] = None
    ram: Optional[str] = None
    storage: Optional[str] = None
    os_version: Optional[str] = None
    purchase_date: Optional[date] = None
    warranty_expiry: Optional[date] = None
    notes: Optional[str] = None
    status: ComputerStatus = ComputerStatus.available


class ComputerUpdate(BaseModel):
    system_id: Optional[str] = None
    name: Optional[str] = None
    location: Optional[str] = None
    processor: Optional[str] = None
    ram: Optional[str] = None
    storage: Optional[str] = None
    os_version: Optional[str] = None
    purchase_date: Optional[date] = None
    warranty_expiry: Optional[date] = None
    notes: Optional[str] = None
    status: Optional[ComputerStatus] = None

    @field_validator("system_id", "name", "status")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)


class ComputerRead(ComputerCreate):
    id: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
