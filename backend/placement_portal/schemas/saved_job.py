from pydantic import BaseModel


class SavedJobCreate(BaseModel):
    job_id: str


class SavedJobResponse(BaseModel):
    id: str
    student_id: str
    job_id: str
    saved_at: str


class SavedJobStatus(BaseModel):
    job_id: str
    saved: bool


class UnsaveResponse(BaseModel):
    job_id: str
    removed: bool
    message: str
