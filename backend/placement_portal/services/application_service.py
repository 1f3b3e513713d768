import logging
import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from placement_portal.errors import ConflictError, ForbiddenError, InvalidRequestError, NotFoundError
from placement_portal.models.application import Application
from placement_portal.models.job import Job
from placement_portal.models.resume import Resume
from placement_portal.models.user import User
from placement_portal.schemas.application import ApplicationCreate
from placement_portal.services.actor import Actor
from placement_portal.services.job_service import is_expired
from placement_portal.services.notification_service import NotificationService
from placement_portal.utils.clock import utc_now

logger = logging.getLogger(__name__)

DECISION_STATUSES = {"accepted", "rejected"}


class ApplicationService:
    def __init__(self, db: Session):
        self.db = db
        self.notifications = NotificationService(db)

    def create_application(self, student_id: str, data: ApplicationCreate) -> Application:
        job = self.db.query(Job).filter(Job.id == data.job_id).first()
        if not job:
            raise NotFoundError("Job not found")
        if not job.is_active:
            raise InvalidRequestError("This job is no longer accepting applications")
        if is_expired(job):
            raise InvalidRequestError("The application deadline for this job has passed")
        if self.check_existing_application(student_id, job.id):
            logger.info("Student %s already applied for job %s", student_id, job.id)
            raise ConflictError("Already applied for this job")

        if data.resume_id:
            resume = (
                self.db.query(Resume)
                .filter(Resume.id == data.resume_id, Resume.student_id == student_id)
                .first()
            )
            if not resume:
                raise NotFoundError("Resume not found")
        else:
            resume = (
                self.db.query(Resume)
                .filter(Resume.student_id == student_id, Resume.is_default.is_(True))
                .first()
            )

        now = utc_now()
        application = Application(
            id=str(uuid.uuid4()),
            student_id=student_id,
            job_id=job.id,
            resume_id=resume.id if resume else None,
            cover_letter=data.cover_letter,
            motivation=data.motivation,
            status="pending",
            rejection_reason=None,
            applied_at=now,
            updated_at=now,
        )
        self.db.add(application)

        student = self.db.query(User).filter(User.id == student_id).first()
        applicant = student.name if student else "A student"
        self.notifications.create_notification(
            job.posted_by,
            "New application",
            f"{applicant} applied for {job.title} at {job.company}.",
            type="application_update",
            commit=False,
        )

        try:
            self.db.commit()
        except IntegrityError:
            # The unique (student_id, job_id) index caught a concurrent duplicate.
            self.db.rollback()
            raise ConflictError("Already applied for this job")
        self.db.refresh(application)
        logger.info("Student %s applied for job %s", student_id, job.id)
        return application

    def check_existing_application(self, student_id: str, job_id: str) -> bool:
        return (
            self.db.query(Application.id)
            .filter(Application.student_id == student_id, Application.job_id == job_id)
            .first()
            is not None
        )

    def get_applications_by_student(self, student_id: str) -> list[Application]:
        return (
            self.db.query(Application)
            .options(joinedload(Application.job), joinedload(Application.resume))
            .filter(Application.student_id == student_id)
            .order_by(Application.applied_at.desc())
            .all()
        )

    def get_applications_by_job(self, job_id: str, actor: Actor) -> list[Application]:
        job = self._get_owned_job(job_id, actor)
        return (
            self.db.query(Application)
            .options(joinedload(Application.student), joinedload(Application.resume))
            .filter(Application.job_id == job.id)
            .order_by(Application.applied_at.desc())
            .all()
        )

    def get_all_applications(self, job_id: str | None = None) -> list[Application]:
        query = self.db.query(Application).options(
            joinedload(Application.job),
            joinedload(Application.student),
            joinedload(Application.resume),
        )
        if job_id:
            query = query.filter(Application.job_id == job_id)
        return query.order_by(Application.applied_at.desc()).all()

    def update_application_status(
        self, application_id: str, status: str, rejection_reason: str | None, actor: Actor
    ) -> Application:
        if status not in DECISION_STATUSES:
            raise InvalidRequestError("Status must be 'accepted' or 'rejected'")

        application = self.db.query(Application).filter(Application.id == application_id).first()
        if not application:
            raise NotFoundError("Application not found")
        job = self._get_owned_job(application.job_id, actor)

        application.status = status
        application.rejection_reason = rejection_reason if status == "rejected" else None
        application.updated_at = utc_now()

        message = f"Your application for {job.title} at {job.company} was {status}."
        if application.rejection_reason:
            message += f" Reason: {application.rejection_reason}"
        self.notifications.create_notification(
            application.student_id,
            "Application status updated",
            message,
            type="application_update",
            commit=False,
        )

        self.db.commit()
        self.db.refresh(application)
        logger.info("Application %s marked %s by %s", application.id, status, actor.id)
        return application

    def _get_owned_job(self, job_id: str, actor: Actor) -> Job:
        if not actor.is_faculty:
            raise ForbiddenError("Only faculty can review applications")
        job = self.db.query(Job).filter(Job.id == job_id).first()
        if not job:
            raise NotFoundError("Job not found")
        if job.posted_by != actor.id:
            raise ForbiddenError("You can only review applications for jobs you posted")
        return job
