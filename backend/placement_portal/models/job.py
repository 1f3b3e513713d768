from sqlalchemy import JSON, Boolean, Column, ForeignKey, Text
from placement_portal.database import Base


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Text, primary_key=True)
    title = Column(Text, nullable=False)
    company = Column(Text, nullable=False)
    location = Column(Text, nullable=False)
    type = Column(Text, nullable=False)
    experience = Column(Text)
    salary = Column(Text)
    description = Column(Text, nullable=False)
    requirements = Column(JSON)
    skills = Column(JSON)
    eligibility = Column(Text)
    deadline = Column(Text, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    posted_by = Column(Text, ForeignKey("users.id"), nullable=False)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)
