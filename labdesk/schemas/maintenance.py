from decimal import Decimal
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from uuid import UUID
from datetime import datetime

from labdesk.schemas.types import UTCDatetime, not_null


class MaintenanceCreate(BaseModel):
    computer_id: UUID
    maintenance_type: str = Field(min_length=1)
    description: str = Field(min_length=1)
    parts_replaced: Optional[str] = None
    cost: Optional[Decimal] = None
    started_at: Optional[UTCDatetime] = None
    completed_at: Optional[UTCDatetime] = None
    notes: Optional[str] = None


class MaintenanceUpdate(BaseModel):
    maintenance_type: Optional[str] = None
    description: Optional[str] = None
    parts_replaced: Optional[str] = None
    cost: Optional[Decimal] = None
    started_at: Optional[UTCDatetime] = None
    completed_at: Optional[UTCDatetime] = None
    notes: Optional[str] = None

    @field_validator("maintenance_type", "description", "started_at")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)


class MaintenanceRead(BaseModel):
    id: UUID
    computer_id: UUID
    performed_by: Optional[UUID] = None
    performer_name: Optional[str] = None
    maintenance_type: str
    description: str
    parts_replaced: Optional[str] = None
    cost: Optional[Decimal] = None
    started_at: datetime
    completed_at: Optional[datetime] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True
