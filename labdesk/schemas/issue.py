from pydantic import BaseModel, Field
from typing import Optional
from uuid import UUID
from datetime import datetime

from labdesk.models.enums import IssuePriority, IssueStatus


class IssueCreate(BaseModel):
    computer_id: UUID
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    priority: IssuePriority = IssuePriority.medium


class IssueStatusUpdate(BaseModel):
    status: IssueStatus
    resolution_notes: Optional[str] = None


class IssueRead(BaseModel):
    id: UUID
    computer_id: UUID
    reported_by: UUID
    title: str
    description: str
    priority: IssuePriority
    status: IssueStatus
    resolution_notes: Optional[str] = None
    resolved_at: Optional[datetime] = None
    resolved_by: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
