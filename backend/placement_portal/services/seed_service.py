import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from placement_portal.models.user import User
from placement_portal.schemas.auth import RegisterRequest
from placement_portal.schemas.job import JobCreate
from placement_portal.services.job_service import JobService
from placement_portal.services.user_service import UserService

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"


def seed_sample_data(db: Session) -> bool:
    """Create a demo student, a demo faculty member and two jobs on an empty database.

    Returns True if anything was written.
    """
    if db.query(User.id).first():
        logger.info("Database already has users; skipping sample data.")
        return False

    users = UserService(db)
    users.create_user(RegisterRequest(
        email="john.smith@college.edu",
        password=DEMO_PASSWORD,
        first_name="John",
        last_name="Smith",
        phone="+1234567890",
        role="student",
        department="Computer Science",
        cgpa=8.4,
        skills=["JavaScript", "Python", "React"],
    ))
    faculty = users.create_user(RegisterRequest(
        email="rajesh.kumar@college.edu",
        password=DEMO_PASSWORD,
        first_name="Rajesh",
        last_name="Kumar",
        phone="+1234567891",
        role="faculty",
        department="Computer Science",
    ))

    now = datetime.now(timezone.utc)
    jobs = JobService(db)
    jobs.create_job(JobCreate(
        title="Senior Software Engineer",
        company="TechCorp",
        location="San Francisco, CA",
        type="full-time",
        experience="3-5 years",
        salary="$120,000 - $150,000",
        description="Looking for experienced software engineers to join our growing team.",
        requirements=["Bachelor's degree in Computer Science or related field"],
        skills=["JavaScript", "React", "Node.js"],
        deadline=now + timedelta(days=30),
    ), posted_by=faculty.id)
    jobs.create_job(JobCreate(
        title="Frontend Developer Intern",
        company="StartupXYZ",
        location="Remote",
        type="internship",
        experience="0-1 years",
        salary="$20/hour",
        description="Summer internship opportunity for frontend development.",
        requirements=["Currently enrolled in Computer Science program"],
        skills=["HTML", "CSS", "JavaScript"],
        deadline=now + timedelta(days=15),
    ), posted_by=faculty.id)

    logger.info("Sample data seeded.")
    return True
