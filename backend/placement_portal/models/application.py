from sqlalchemy import Column, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from placement_portal.database import Base


class Application(Base):
    __tablename__ = "applications"

    id = Column(Text, primary_key=True)
    student_id = Column(Text, ForeignKey("users.id"), nullable=False)
    job_id = Column(Text, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    resume_id = Column(Text, ForeignKey("resumes.id", ondelete="SET NULL"))
    cover_letter = Column(Text)
    motivation = Column(Text)
    status = Column(Text, nullable=False, default="pending")
    rejection_reason = Column(Text)
    applied_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    student = relationship("User")
    job = relationship("Job")
    resume = relationship("Resume")

    __table_args__ = (
        UniqueConstraint("student_id", "job_id", name="idx_applications_student_job"),
    )
