from fastapi import APIRouter, Depends, Query

from placement_portal.dependencies import get_job_service, get_optional_user, require_faculty
from placement_portal.models.job import Job
from placement_portal.schemas.job import JobCreate, JobResponse, JobType, JobUpdate
from placement_portal.services.actor import Actor
from placement_portal.services.job_service import AnnotatedJob, JobFilters, JobService, is_expired

router = APIRouter(prefix="/jobs", tags=["jobs"])


def job_to_response(job: Job, saved_by_user: bool = False, applied_by_user: bool = False) -> JobResponse:
    return JobResponse(
        id=job.id,
        title=job.title,
        company=job.company,
        location=job.location,
        type=job.type,
        experience=job.experience,
        salary=job.salary,
        description=job.description,
        requirements=job.requirements or [],
        skills=job.skills or [],
        eligibility=job.eligibility,
        deadline=job.deadline,
        is_active=bool(job.is_active),
        is_expired=is_expired(job),
        posted_by=job.posted_by,
        created_at=job.created_at,
        updated_at=job.updated_at,
        saved_by_user=saved_by_user,
        applied_by_user=applied_by_user,
    )


def annotated_to_response(item: AnnotatedJob) -> JobResponse:
    return job_to_response(item.job, item.saved_by_user, item.applied_by_user)


@router.get("", response_model=list[JobResponse])
def list_jobs(
    location: str | None = None,
    type: JobType | None = None,
    search: str | None = None,
    active_only: bool = Query(False),
    actor: Actor | None = Depends(get_optional_user),
    jobs: JobService = Depends(get_job_service),
):
    filters = JobFilters(
        location=location,
        type=type,
        search=search,
        active_only=active_only,
    )
    results = jobs.get_jobs(filters, user_id=actor.id if actor else None)
    return [annotated_to_response(r) for r in results]


@router.get("/mine", response_model=list[JobResponse])
def list_my_jobs(
    actor: Actor = Depends(require_faculty),
    jobs: JobService = Depends(get_job_service),
):
    return [annotated_to_response(r) for r in jobs.get_jobs_by_poster(actor.id)]


@router.post("", response_model=JobResponse, status_code=201)
def create_job(
    req: JobCreate,
    actor: Actor = Depends(require_faculty),
    jobs: JobService = Depends(get_job_service),
):
    return job_to_response(jobs.create_job(req, posted_by=actor.id))


@router.get("/{job_id}", response_model=JobResponse)
def get_job(
    job_id: str,
    actor: Actor | None = Depends(get_optional_user),
    jobs: JobService = Depends(get_job_service),
):
    return annotated_to_response(jobs.get_job(job_id, user_id=actor.id if actor else None))


@router.put("/{job_id}", response_model=JobResponse)
def update_job(
    job_id: str,
    req: JobUpdate,
    actor: Actor = Depends(require_faculty),
    jobs: JobService = Depends(get_job_service),
):
    return job_to_response(jobs.update_job(job_id, req, actor))


@router.delete("/{job_id}")
def delete_job(
    job_id: str,
    actor: Actor = Depends(require_faculty),
    jobs: JobService = Depends(get_job_service),
):
    jobs.delete_job(job_id, actor)
    return {"message": "Job deleted"}
