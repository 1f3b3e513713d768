from pydantic import BaseModel, EmailStr, Field


class UserResponse(BaseModel):
    id: str
    email: str
    first_name: str
    last_name: str
    name: str
    phone: str | None
    role: str
    department: str | None
    roll_number: str | None
    cgpa: float | None
    skills: list[str]
    created_at: str


class ProfileUpdate(BaseModel):
    """Fields a user may change about themselves. Password and role are not among them."""
    email: EmailStr | None = None
    first_name: str | None = Field(None, min_length=1)
    last_name: str | None = Field(None, min_length=1)
    phone: str | None = None
    department: str | None = None
    roll_number: str | None = None
    cgpa: float | None = Field(None, ge=0, le=10)
    skills: list[str] | None = None
