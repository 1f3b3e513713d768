from typing import Literal

from pydantic import BaseModel, EmailStr, Field

from placement_portal.schemas.user import UserResponse


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    role: Literal["student", "faculty"]
    phone: str | None = None
    department: str | None = None
    roll_number: str | None = None
    cgpa: float | None = Field(None, ge=0, le=10)
    skills: list[str] = []


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class AuthResponse(BaseModel):
    user: UserResponse
    token: str
    token_type: str = "bearer"
