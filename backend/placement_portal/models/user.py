from sqlalchemy import JSON, Column, Float, Text
from placement_portal.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Text, primary_key=True)
    email = Column(Text, nullable=False, unique=True)
    password_hash = Column(Text, nullable=False)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    phone = Column(Text)
    role = Column(Text, nullable=False)
    department = Column(Text)
    roll_number = Column(Text)
    cgpa = Column(Float)
    skills = Column(JSON)
    created_at = Column(Text, nullable=False)

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
