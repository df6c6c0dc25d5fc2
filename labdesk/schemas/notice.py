from pydantic import BaseModel, Field, field_validator
from typing import Optional
from uuid import UUID
from datetime import datetime

from labdesk.models.enums import NoticePriority
from labdesk.schemas.types import UTCDatetime, not_null


class NoticeCreate(BaseModel):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    priority: NoticePriority = NoticePriority.normal
    is_active: bool = True
    expires_at: Optional[UTCDatetime] = None


class NoticeUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    priority: Optional[NoticePriority] = None
    is_active: Optional[bool] = None
    expires_at: Optional[UTCDatetime] = None

    @field_validator("title", "content", "priority", "is_active")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)


class NoticeRead(BaseModel):
    id: UUID
    title: str
    content: str
    priority: NoticePriority
    is_active: bool
    expires_at: Optional[datetime] = None
    created_by: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
