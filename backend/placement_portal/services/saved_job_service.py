import logging
import uuid

from sqlalchemy import text
from sqlalchemy.orm import Session, joinedload

from placement_portal.errors import NotFoundError
from placement_portal.models.job import Job
from placement_portal.models.saved_job import SavedJob
from placement_portal.services.job_service import AnnotatedJob, JobService
from placement_portal.utils.clock import utc_now

logger = logging.getLogger(__name__)


class SavedJobService:
    def __init__(self, db: Session):
        self.db = db

    def save_job(self, student_id: str, job_id: str) -> SavedJob:
        if not self.db.query(Job.id).filter(Job.id == job_id).first():
            raise NotFoundError("Job not found")

        self.db.execute(
            text(
                """
                INSERT INTO saved_jobs (id, student_id, job_id, saved_at)
                VALUES (:id, :student_id, :job_id, :saved_at)
                ON CONFLICT(student_id, job_id) DO NOTHING
                """
            ),
            {"id": str(uuid.uuid4()), "student_id": student_id, "job_id": job_id, "saved_at": utc_now()},
        )
        self.db.commit()
        return self._get(student_id, job_id)

    def unsave_job(self, student_id: str, job_id: str) -> bool:
        removed = (
            self.db.query(SavedJob)
            .filter(SavedJob.student_id == student_id, SavedJob.job_id == job_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return removed > 0

    def check_saved_job(self, student_id: str, job_id: str) -> bool:
        return self._get(student_id, job_id) is not None

    def get_saved_jobs(self, student_id: str) -> list[AnnotatedJob]:
        rows = (
            self.db.query(SavedJob)
            .options(joinedload(SavedJob.job))
            .filter(SavedJob.student_id == student_id)
            .order_by(SavedJob.saved_at.desc())
            .all()
        )
        return JobService(self.db).annotate([row.job for row in rows], student_id)

    def _get(self, student_id: str, job_id: str) -> SavedJob | None:
        return (
            self.db.query(SavedJob)
            .filter(SavedJob.student_id == student_id, SavedJob.job_id == job_id)
            .first()
        )
