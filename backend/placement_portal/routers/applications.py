from fastapi import APIRouter, Depends

from placement_portal.dependencies import get_application_service, require_faculty, require_student
from placement_portal.models.application import Application
from placement_portal.routers.jobs import job_to_response
from placement_portal.routers.resumes import resume_to_response
from placement_portal.routers.users import user_to_response
from placement_portal.schemas.application import ApplicationCreate, ApplicationResponse, ApplicationStatusUpdate
from placement_portal.services.actor import Actor
from placement_portal.services.application_service import ApplicationService

router = APIRouter(prefix="/applications", tags=["applications"])

job_applications_router = APIRouter(prefix="/jobs/{job_id}/applications", tags=["applications"])


def _application_to_response(
    application: Application,
    with_job: bool = False,
    with_student: bool = False,
) -> ApplicationResponse:
    return ApplicationResponse(
        id=application.id,
        student_id=application.student_id,
        job_id=application.job_id,
        resume_id=application.resume_id,
        cover_letter=application.cover_letter,
        motivation=application.motivation,
        status=application.status,
        rejection_reason=application.rejection_reason,
        applied_at=application.applied_at,
        updated_at=application.updated_at,
        job=job_to_response(application.job) if with_job and application.job else None,
        student=user_to_response(application.student) if with_student and application.student else None,
        resume=resume_to_response(application.resume) if application.resume else None,
    )


@router.post("", response_model=ApplicationResponse, status_code=201)
def create_application(
    req: ApplicationCreate,
    actor: Actor = Depends(require_student),
    applications: ApplicationService = Depends(get_application_service),
):
    return _application_to_response(applications.create_application(actor.id, req))


@router.get("/my", response_model=list[ApplicationResponse])
def list_my_applications(
    actor: Actor = Depends(require_student),
    applications: ApplicationService = Depends(get_application_service),
):
    return [
        _application_to_response(a, with_job=True)
        for a in applications.get_applications_by_student(actor.id)
    ]


@router.get("", response_model=list[ApplicationResponse])
def list_applications(
    job_id: str | None = None,
    actor: Actor = Depends(require_faculty),
    applications: ApplicationService = Depends(get_application_service),
):
    return [
        _application_to_response(a, with_job=True, with_student=True)
        for a in applications.get_all_applications(job_id)
    ]


@router.put("/{application_id}/status", response_model=ApplicationResponse)
def update_application_status(
    application_id: str,
    req: ApplicationStatusUpdate,
    actor: Actor = Depends(require_faculty),
    applications: ApplicationService = Depends(get_application_service),
):
    updated = applications.update_application_status(
        application_id, req.status, req.rejection_reason, actor
    )
    return _application_to_response(updated)


@job_applications_router.get("", response_model=list[ApplicationResponse])
def list_job_applications(
    job_id: str,
    actor: Actor = Depends(require_faculty),
    applications: ApplicationService = Depends(get_application_service),
):
    return [
        _application_to_response(a, with_student=True)
        for a in applications.get_applications_by_job(job_id, actor)
    ]
