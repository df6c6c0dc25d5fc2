from pydantic import BaseModel, field_validator
from typing import List, Optional
from uuid import UUID
from datetime import date, datetime

from labdesk.schemas.types import not_null


class SoftwareCreate(BaseModel):
    name: str
    version: Optional[str] = None
    vendor: Optional[str] = None
    license_key: Optional[str] = None
    license_expiry: Optional[date] = None
    notes: Optional[str] = None


class SoftwareUpdate(BaseModel):
    name: Optional[str] = None
    version: Optional[str] = None
    vendor: Optional[str] = None
    license_key: Optional[str] = None
    license_expiry: Optional[date] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)


class SoftwareRead(SoftwareCreate):
    id: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class InstalledOn(BaseModel):
    installation_id: UUID
    computer_id: UUID
    name: str
    system_id: str


class SoftwareWithInstallations(SoftwareRead):
    installation_count: int = 0
    installed_on: List[InstalledOn] = []


class InstallRequest(BaseModel):
    computer_id: UUID


class InstallationRead(BaseModel):
    id: UUID
    computer_id: UUID
    software_id: UUID
    installed_at: datetime

    class Config:
        from_attributes = True
