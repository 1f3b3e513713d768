from sqlalchemy import Column, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from placement_portal.database import Base


class SavedJob(Base):
    __tablename__ = "saved_jobs"

    id = Column(Text, primary_key=True)
    student_id = Column(Text, ForeignKey("users.id"), nullable=False)
    job_id = Column(Text, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    saved_at = Column(Text, nullable=False)

    job = relationship("Job")

    __table_args__ = (
        UniqueConstraint("student_id", "job_id", name="idx_saved_jobs_student_job"),
    )
