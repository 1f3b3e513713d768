from sqlalchemy import Boolean, Column, ForeignKey, Text
from placement_portal.database import Base


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Text, primary_key=True)
    user_id = Column(Text, ForeignKey("users.id"), nullable=False)
    title = Column(Text, nullable=False)
    message = Column(Text, nullable=False)
    type = Column(Text, nullable=False, default="general")
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(Text, nullable=False)
