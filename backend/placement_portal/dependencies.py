from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from placement_portal.database import get_db
from placement_portal.services.actor import Actor
from placement_portal.services.application_service import ApplicationService
from placement_portal.services.job_service import JobService
from placement_portal.services.notification_service import NotificationService
from placement_portal.services.resume_service import ResumeService
from placement_portal.services.saved_job_service import SavedJobService
from placement_portal.services.user_service import UserService
from placement_portal.utils.security import decode_access_token


def _actor_from_header(authorization: str) -> Actor:
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing bearer token")
    claims = decode_access_token(authorization[7:])
    if not claims or not claims.get("sub") or claims.get("role") not in ("student", "faculty"):
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    return Actor(id=claims["sub"], email=claims.get("email", ""), role=claims["role"])


async def get_current_user(authorization: str | None = Header(None)) -> Actor:
    if not authorization:
        raise HTTPException(status_code=401, detail="Missing bearer token")
    return _actor_from_header(authorization)


async def get_optional_user(authorization: str | None = Header(None)) -> Actor | None:
    # A bad token is still an error; only a missing header means anonymous.
    if not authorization:
        return None
    return _actor_from_header(authorization)


async def require_student(actor: Actor = Depends(get_current_user)) -> Actor:
    if not actor.is_student:
        raise HTTPException(status_code=403, detail="Student access required")
    return actor


async def require_faculty(actor: Actor = Depends(get_current_user)) -> Actor:
    if not actor.is_faculty:
        raise HTTPException(status_code=403, detail="Faculty access required")
    return actor


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


def get_job_service(db: Session = Depends(get_db)) -> JobService:
    return JobService(db)


def get_application_service(db: Session = Depends(get_db)) -> ApplicationService:
    return ApplicationService(db)


def get_resume_service(db: Session = Depends(get_db)) -> ResumeService:
    return ResumeService(db)


def get_saved_job_service(db: Session = Depends(get_db)) -> SavedJobService:
    return SavedJobService(db)


def get_notification_service(db: Session = Depends(get_db)) -> NotificationService:
    return NotificationService(db)
