from pydantic import BaseModel, EmailStr, Field
from typing import Optional

from labdesk.schemas.user import ProfileRead


# -------------------------------------------------------------------
# LOGIN REQUEST
# -------------------------------------------------------------------
class LoginRequest(BaseModel):
    email: EmailStr
    password: str


# -------------------------------------------------------------------
# REGISTER REQUEST (self sign-up, always a student)
# -------------------------------------------------------------------
class RegisterRequest(BaseModel):
    full_name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=6)
    department: Optional[str] = None
    phone: Optional[str] = None
    student_id: Optional[str] = None

    class Config:
        json_schema_extra = {
            "examples": [
                {
                    "full_name": "Student User",
                    "email": "student@example.com",
                    "password": "password123",
                    "department": "Computer Science",
                    "student_id": "CS-2024-001"
                }
            ]
        }


# -------------------------------------------------------------------
# TOKEN + USER DETAILS (login response)
# -------------------------------------------------------------------
class TokenWithUser(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: Optional[int] = None
    user: ProfileRead
