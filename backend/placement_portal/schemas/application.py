from typing import Literal

from pydantic import BaseModel

from placement_portal.schemas.job import JobResponse
from placement_portal.schemas.resume import ResumeResponse
from placement_portal.schemas.user import UserResponse


class ApplicationCreate(BaseModel):
    job_id: str
    resume_id: str | None = None
    cover_letter: str | None = None
    motivation: str | None = None


class ApplicationStatusUpdate(BaseModel):
    status: Literal["pending", "accepted", "rejected"]
    rejection_reason: str | None = None


class ApplicationResponse(BaseModel):
    id: str
    student_id: str
    job_id: str
    resume_id: str | None
    cover_letter: str | None
    motivation: str | None
    status: str
    rejection_reason: str | None
    applied_at: str
    updated_at: str
    job: JobResponse | None = None
    student: UserResponse | None = None
    resume: ResumeResponse | None = None
