from pydantic import BaseModel


class ResumeResponse(BaseModel):
    id: str
    student_id: str
    file_name: str
    file_path: str
    file_hash: str
    file_size_bytes: int
    mime_type: str | None
    is_default: bool
    uploaded_at: str
