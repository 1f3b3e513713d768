from fastapi import APIRouter, Depends

from placement_portal.dependencies import get_saved_job_service, require_student
from placement_portal.models.saved_job import SavedJob
from placement_portal.routers.jobs import annotated_to_response
from placement_portal.schemas.job import JobResponse
from placement_portal.schemas.saved_job import SavedJobCreate, SavedJobResponse, SavedJobStatus, UnsaveResponse
from placement_portal.services.actor import Actor
from placement_portal.services.saved_job_service import SavedJobService

router = APIRouter(prefix="/saved-jobs", tags=["saved-jobs"])


def _saved_to_response(saved: SavedJob) -> SavedJobResponse:
    return SavedJobResponse(
        id=saved.id,
        student_id=saved.student_id,
        job_id=saved.job_id,
        saved_at=saved.saved_at,
    )


@router.post("", response_model=SavedJobResponse, status_code=201)
def save_job(
    req: SavedJobCreate,
    actor: Actor = Depends(require_student),
    saved_jobs: SavedJobService = Depends(get_saved_job_service),
):
    return _saved_to_response(saved_jobs.save_job(actor.id, req.job_id))


@router.get("", response_model=list[JobResponse])
def list_saved_jobs(
    actor: Actor = Depends(require_student),
    saved_jobs: SavedJobService = Depends(get_saved_job_service),
):
    return [annotated_to_response(r) for r in saved_jobs.get_saved_jobs(actor.id)]


@router.get("/{job_id}/status", response_model=SavedJobStatus)
def saved_status(
    job_id: str,
    actor: Actor = Depends(require_student),
    saved_jobs: SavedJobService = Depends(get_saved_job_service),
):
    return SavedJobStatus(job_id=job_id, saved=saved_jobs.check_saved_job(actor.id, job_id))


@router.delete("/{job_id}", response_model=UnsaveResponse)
def unsave_job(
    job_id: str,
    actor: Actor = Depends(require_student),
    saved_jobs: SavedJobService = Depends(get_saved_job_service),
):
    removed = saved_jobs.unsave_job(actor.id, job_id)
    message = "Job removed from saved jobs" if removed else "Job was not saved"
    return UnsaveResponse(job_id=job_id, removed=removed, message=message)
