from pydantic import BaseModel, Field
from typing import Any, Dict, Literal, Optional, Union
from uuid import UUID
from datetime import datetime


class NotificationCreate(BaseModel):
    # A single recipient, or "all" to fan out to every profile
    user_id: Union[UUID, Literal["all"]]
    type: str = "system"
    title: str = Field(min_length=1)
    message: str = Field(min_length=1)
    link: Optional[str] = None


class NotificationRead(BaseModel):
    id: UUID
    user_id: UUID
    type: str
    title: str
    message: str
    link: Optional[str] = None
    metadata: Dict[str, Any] = Field(default={}, validation_alias="extra")
    read: bool
    created_at: datetime

    class Config:
        from_attributes = True


class NotificationSent(BaseModel):
    created: int
