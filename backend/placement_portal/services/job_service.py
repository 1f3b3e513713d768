import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import or_
from sqlalchemy.orm import Session

from placement_portal.errors import ForbiddenError, NotFoundError
from placement_portal.models.application import Application
from placement_portal.models.job import Job
from placement_portal.models.saved_job import SavedJob
from placement_portal.schemas.job import JobCreate, JobUpdate
from placement_portal.services.actor import Actor
from placement_portal.services.search_service import JobSearchIndex, job_search_index
from placement_portal.utils.clock import parse_timestamp, to_timestamp, utc_now

logger = logging.getLogger(__name__)


@dataclass
class JobFilters:
    location: str | None = None
    type: str | None = None
    search: str | None = None
    active_only: bool = False
    posted_by: str | None = None


@dataclass
class AnnotatedJob:
    job: Job
    saved_by_user: bool = False
    applied_by_user: bool = False


def like_pattern(value: str) -> str:
    """Wrap ``value`` for a substring ILIKE, with wildcards matched literally."""
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def is_expired(job: Job, now: datetime | None = None) -> bool:
    now = now or datetime.now(timezone.utc)
    return parse_timestamp(job.deadline) < now


class JobService:
    def __init__(self, db: Session, search_index: JobSearchIndex | None = None):
        self.db = db
        self.search_index = search_index or job_search_index

    def create_job(self, data: JobCreate, posted_by: str) -> Job:
        now = utc_now()
        job = Job(
            id=str(uuid.uuid4()),
            title=data.title,
            company=data.company,
            location=data.location,
            type=data.type,
            experience=data.experience,
            salary=data.salary,
            description=data.description,
            requirements=list(data.requirements),
            skills=list(data.skills),
            eligibility=data.eligibility,
            deadline=to_timestamp(data.deadline),
            is_active=data.is_active,
            posted_by=posted_by,
            created_at=now,
            updated_at=now,
        )
        self.db.add(job)
        self.db.commit()
        self.db.refresh(job)
        logger.info("Job %s posted by %s", job.id, posted_by)
        return job

    def get_jobs(self, filters: JobFilters | None = None, user_id: str | None = None) -> list[AnnotatedJob]:
        filters = filters or JobFilters()
        query = self.db.query(Job)

        if filters.location:
            query = query.filter(Job.location.ilike(like_pattern(filters.location), escape="\\"))
        if filters.type:
            query = query.filter(Job.type == filters.type)
        if filters.active_only:
            query = query.filter(Job.is_active.is_(True))
        if filters.posted_by:
            query = query.filter(Job.posted_by == filters.posted_by)
        search = (filters.search or "").strip()
        if search:
            matched_ids = self.search_index.search(self.db, search)
            if matched_ids is not None:
                query = query.filter(Job.id.in_(matched_ids))
            else:
                term = like_pattern(search)
                query = query.filter(
                    or_(
                        Job.title.ilike(term, escape="\\"),
                        Job.company.ilike(term, escape="\\"),
                        Job.description.ilike(term, escape="\\"),
                    )
                )

        jobs = query.order_by(Job.created_at.desc()).all()
        return self.annotate(jobs, user_id)

    def annotate(self, jobs: list[Job], user_id: str | None) -> list[AnnotatedJob]:
        if not user_id:
            return [AnnotatedJob(job) for job in jobs]

        saved_ids = {
            row.job_id
            for row in self.db.query(SavedJob.job_id).filter(SavedJob.student_id == user_id)
        }
        applied_ids = {
            row.job_id
            for row in self.db.query(Application.job_id).filter(Application.student_id == user_id)
        }
        return [
            AnnotatedJob(job, saved_by_user=job.id in saved_ids, applied_by_user=job.id in applied_ids)
            for job in jobs
        ]

    def get_job(self, job_id: str, user_id: str | None = None) -> AnnotatedJob:
        job = self._get_or_404(job_id)
        return self.annotate([job], user_id)[0]

    def get_jobs_by_poster(self, user_id: str) -> list[AnnotatedJob]:
        return self.get_jobs(JobFilters(posted_by=user_id))

    def update_job(self, job_id: str, updates: JobUpdate, actor: Actor) -> Job:
        job = self._get_owned(job_id, actor)

        update_data = updates.model_dump(exclude_unset=True)
        if "deadline" in update_data and update_data["deadline"] is not None:
            update_data["deadline"] = to_timestamp(update_data["deadline"])
        for key, value in update_data.items():
            if value is None and key in ("title", "company", "location", "type", "description", "deadline", "is_active"):
                continue
            setattr(job, key, value)
        job.updated_at = utc_now()

        self.db.commit()
        self.db.refresh(job)
        return job

    def delete_job(self, job_id: str, actor: Actor) -> None:
        job = self._get_owned(job_id, actor)
        self.db.delete(job)
        self.db.commit()
        logger.info("Job %s deleted by %s", job_id, actor.id)

    def _get_or_404(self, job_id: str) -> Job:
        job = self.db.query(Job).filter(Job.id == job_id).first()
        if not job:
            raise NotFoundError("Job not found")
        return job

    def _get_owned(self, job_id: str, actor: Actor) -> Job:
        if not actor.is_faculty:
            raise ForbiddenError("Only faculty can manage jobs")
        job = self._get_or_404(job_id)
        if job.posted_by != actor.id:
            raise ForbiddenError("You can only manage jobs you posted")
        return job
