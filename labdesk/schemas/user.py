from typing import Optional
from uuid import UUID
from pydantic import BaseModel, EmailStr, field_validator
from labdesk.schemas.types import not_null
from labdesk.core.scoping import AccessScope, scope_for_role
from labdesk.models.enums import AppRole


# ---------------------------------------------------------
# READ PROFILE (response)
# ---------------------------------------------------------
class ProfileRead(BaseModel):
    id: UUID
    email: EmailStr
    full_name: str
    department: Optional[str] = None
    phone: Optional[str] = None
    student_id: Optional[str] = None
    avatar_url: Optional[str] = None
    role: AppRole = AppRole.student

    class Config:
        from_attributes = True


# ---------------------------------------------------------
# UPDATE OWN PROFILE
# ---------------------------------------------------------
class ProfileUpdate(BaseModel):
    full_name: Optional[str] = None
    department: Optional[str] = None
    phone: Optional[str] = None
    student_id: Optional[str] = None
    avatar_url: Optional[str] = None

    @field_validator("full_name")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)


# ---------------------------------------------------------
# CHANGE ROLE (Admin)
# ---------------------------------------------------------
class RoleUpdate(BaseModel):
    role: AppRole


# ---------------------------------------------------------
# AUTHENTICATED CALLER (resolved per request)
# ---------------------------------------------------------
class CurrentUser(BaseModel):
    id: UUID
    email: str
    role: AppRole

    @property
    def is_admin_or_staff(self) -> bool:
        return self.role in (AppRole.admin, AppRole.lab_staff)

    @property
    def scope(self) -> AccessScope:
        return scope_for_role(self.role)
