from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import FileResponse

from placement_portal.config import settings
from placement_portal.dependencies import get_current_user, get_resume_service, require_student
from placement_portal.errors import PayloadTooLargeError
from placement_portal.models.resume import Resume
from placement_portal.schemas.resume import ResumeResponse
from placement_portal.services.actor import Actor
from placement_portal.services.resume_service import ResumeService

router = APIRouter(prefix="/resumes", tags=["resumes"])


def resume_to_response(resume: Resume) -> ResumeResponse:
    return ResumeResponse(
        id=resume.id,
        student_id=resume.student_id,
        file_name=resume.file_name,
        file_path=resume.file_path,
        file_hash=resume.file_hash,
        file_size_bytes=resume.file_size_bytes,
        mime_type=resume.mime_type,
        is_default=bool(resume.is_default),
        uploaded_at=resume.uploaded_at,
    )


@router.post("", response_model=ResumeResponse, status_code=201)
async def upload_resume(
    resume: UploadFile = File(...),
    is_default: bool = Form(False),
    actor: Actor = Depends(require_student),
    resumes: ResumeService = Depends(get_resume_service),
):
    # Read in chunks so an oversized upload is rejected before it is fully buffered.
    max_bytes = settings.max_upload_bytes
    size = 0
    chunks: list[bytes] = []
    while True:
        chunk = await resume.read(1024 * 1024)
        if not chunk:
            break
        size += len(chunk)
        if size > max_bytes:
            raise PayloadTooLargeError(f"File too large (max {max_bytes} bytes)")
        chunks.append(chunk)

    stored = resumes.upload_resume(
        actor.id,
        resume.filename,
        b"".join(chunks),
        content_type=resume.content_type,
        is_default=is_default,
    )
    return resume_to_response(stored)


@router.get("/my", response_model=list[ResumeResponse])
def list_my_resumes(
    actor: Actor = Depends(require_student),
    resumes: ResumeService = Depends(get_resume_service),
):
    return [resume_to_response(r) for r in resumes.get_resumes_by_student(actor.id)]


@router.get("/{resume_id}/download")
def download_resume(
    resume_id: str,
    actor: Actor = Depends(get_current_user),
    resumes: ResumeService = Depends(get_resume_service),
):
    resume, full_path = resumes.get_resume_for_download(resume_id, actor)
    return FileResponse(
        full_path,
        filename=resume.file_name,
        media_type=resume.mime_type or "application/octet-stream",
    )


@router.put("/{resume_id}/default", response_model=ResumeResponse)
def set_default_resume(
    resume_id: str,
    actor: Actor = Depends(require_student),
    resumes: ResumeService = Depends(get_resume_service),
):
    return resume_to_response(resumes.set_default_resume(resume_id, actor.id))


@router.delete("/{resume_id}")
def delete_resume(
    resume_id: str,
    actor: Actor = Depends(require_student),
    resumes: ResumeService = Depends(get_resume_service),
):
    resumes.delete_resume(resume_id, actor.id)
    return {"message": "Resume deleted"}
