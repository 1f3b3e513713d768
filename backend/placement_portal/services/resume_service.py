import logging
import mimetypes
import uuid
from pathlib import Path

from sqlalchemy.orm import Session

from placement_portal.config import settings
from placement_portal.errors import ForbiddenError, InvalidRequestError, NotFoundError, PayloadTooLargeError
from placement_portal.models.resume import Resume
from placement_portal.services.actor import Actor
from placement_portal.utils.clock import utc_now
from placement_portal.utils.filesystem import ensure_student_upload_dir, sanitize_filename
from placement_portal.utils.hashing import sha256_bytes

logger = logging.getLogger(__name__)


def store_resume(student_id: str, resume_id: str, filename: str, content: bytes) -> tuple[str, str, int]:
    """Write an uploaded resume to disk. Returns (relative_path, file_hash, file_size)."""
    file_hash = sha256_bytes(content)
    safe_name = sanitize_filename(filename)
    stored_name = f"{file_hash[:8]}_{resume_id[:8]}_{safe_name}"

    student_dir = ensure_student_upload_dir(student_id)
    (student_dir / stored_name).write_bytes(content)

    relative_path = f"uploads/{student_id}/{stored_name}"
    return relative_path, file_hash, len(content)


def get_resume_full_path(stored_path: str, data_path: Path | None = None) -> Path:
    return (data_path or settings.data_path) / stored_path


class ResumeService:
    def __init__(self, db: Session):
        self.db = db

    def validate_upload(self, filename: str | None, content: bytes) -> None:
        if not filename:
            raise InvalidRequestError("No file uploaded")
        extension = Path(filename).suffix.lower()
        if extension not in settings.allowed_resume_extensions:
            allowed = ", ".join(settings.allowed_resume_extensions)
            raise InvalidRequestError(f"Only {allowed} files are allowed")
        if not content:
            raise InvalidRequestError("Empty file")
        if len(content) > settings.max_upload_bytes:
            raise PayloadTooLargeError(f"File too large (max {settings.max_upload_bytes} bytes)")

    def upload_resume(
        self,
        student_id: str,
        filename: str | None,
        content: bytes,
        content_type: str | None = None,
        is_default: bool = False,
    ) -> Resume:
        self.validate_upload(filename, content)

        resume_id = str(uuid.uuid4())
        stored_path, file_hash, file_size = store_resume(student_id, resume_id, filename, content)
        mime_type = content_type or mimetypes.guess_type(filename)[0]

        if is_default:
            self._clear_defaults(student_id)
        resume = Resume(
            id=resume_id,
            student_id=student_id,
            file_name=filename,
            file_path=stored_path,
            file_hash=file_hash,
            file_size_bytes=file_size,
            mime_type=mime_type,
            is_default=is_default,
            uploaded_at=utc_now(),
        )
        self.db.add(resume)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            self._remove_file(stored_path)
            raise
        self.db.refresh(resume)
        logger.info("Stored resume %s for student %s (%d bytes)", resume.id, student_id, file_size)
        return resume

    def get_resumes_by_student(self, student_id: str) -> list[Resume]:
        return (
            self.db.query(Resume)
            .filter(Resume.student_id == student_id)
            .order_by(Resume.uploaded_at.desc())
            .all()
        )

    def get_resume(self, resume_id: str) -> Resume:
        resume = self.db.query(Resume).filter(Resume.id == resume_id).first()
        if not resume:
            raise NotFoundError("Resume not found")
        return resume

    def get_resume_for_download(self, resume_id: str, actor: Actor) -> tuple[Resume, Path]:
        resume = self.get_resume(resume_id)
        if not actor.is_faculty and resume.student_id != actor.id:
            raise ForbiddenError("You can only download your own resumes")
        full_path = get_resume_full_path(resume.file_path)
        if not full_path.exists():
            raise NotFoundError("File not found on disk")
        return resume, full_path

    def set_default_resume(self, resume_id: str, student_id: str) -> Resume:
        # Both statements share one transaction; the partial unique index on
        # (student_id) WHERE is_default = 1 rejects any interleaving that
        # would leave two defaults.
        self._clear_defaults(student_id, keep_id=resume_id)
        updated = (
            self.db.query(Resume)
            .filter(Resume.id == resume_id, Resume.student_id == student_id)
            .update({Resume.is_default: True}, synchronize_session=False)
        )
        if not updated:
            self.db.rollback()
            raise NotFoundError("Resume not found")
        self.db.commit()
        return self.get_resume(resume_id)

    def delete_resume(self, resume_id: str, student_id: str) -> None:
        resume = (
            self.db.query(Resume)
            .filter(Resume.id == resume_id, Resume.student_id == student_id)
            .first()
        )
        if not resume:
            raise NotFoundError("Resume not found")
        stored_path = resume.file_path
        # applications.resume_id is ON DELETE SET NULL
        self.db.delete(resume)
        self.db.commit()
        self._remove_file(stored_path)
        logger.info("Deleted resume %s for student %s", resume_id, student_id)

    def _clear_defaults(self, student_id: str, keep_id: str | None = None) -> None:
        query = self.db.query(Resume).filter(
            Resume.student_id == student_id, Resume.is_default.is_(True)
        )
        if keep_id:
            query = query.filter(Resume.id != keep_id)
        query.update({Resume.is_default: False}, synchronize_session=False)

    def _remove_file(self, stored_path: str) -> None:
        try:
            get_resume_full_path(stored_path).unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not remove resume file %s: %s", stored_path, exc)
