from sqlalchemy import Boolean, Column, ForeignKey, Index, Integer, Text
from placement_portal.database import Base


class Resume(Base):
    __tablename__ = "resumes"

    id = Column(Text, primary_key=True)
    student_id = Column(Text, ForeignKey("users.id"), nullable=False)
    file_name = Column(Text, nullable=False)
    file_path = Column(Text, nullable=False)
    file_hash = Column(Text, nullable=False)
    file_size_bytes = Column(Integer, nullable=False)
    mime_type = Column(Text)
    is_default = Column(Boolean, nullable=False, default=False)
    uploaded_at = Column(Text, nullable=False)

    __table_args__ = (
        Index(
            "idx_resumes_one_default",
            "student_id",
            unique=True,
            sqlite_where=is_default == True,  # noqa: E712
        ),
    )
