from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, BeforeValidator, Field


def _normalise_type(value):
    return value.strip().lower() if isinstance(value, str) else value


JobType = Annotated[Literal["full-time", "part-time", "internship"], BeforeValidator(_normalise_type)]


class JobCreate(BaseModel):
    title: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    type: JobType
    experience: str | None = None
    salary: str | None = None
    description: str = Field(..., min_length=1)
    requirements: list[str] = []
    skills: list[str] = []
    eligibility: str | None = None
    deadline: datetime
    is_active: bool = True


class JobUpdate(BaseModel):
    title: str | None = Field(None, min_length=1)
    company: str | None = Field(None, min_length=1)
    location: str | None = Field(None, min_length=1)
    type: JobType | None = None
    experience: str | None = None
    salary: str | None = None
    description: str | None = Field(None, min_length=1)
    requirements: list[str] | None = None
    skills: list[str] | None = None
    eligibility: str | None = None
    deadline: datetime | None = None
    is_active: bool | None = None


class JobResponse(BaseModel):
    id: str
    title: str
    company: str
    location: str
    type: str
    experience: str | None
    salary: str | None
    description: str
    requirements: list[str]
    skills: list[str]
    eligibility: str | None
    deadline: str
    is_active: bool
    is_expired: bool
    posted_by: str
    created_at: str
    updated_at: str
    saved_by_user: bool = False
    applied_by_user: bool = False
