import logging
import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from placement_portal.errors import AuthenticationError, ConflictError, NotFoundError
from placement_portal.models.user import User
from placement_portal.schemas.auth import RegisterRequest
from placement_portal.schemas.user import ProfileUpdate
from placement_portal.utils import security
from placement_portal.utils.clock import utc_now

logger = logging.getLogger(__name__)

# Never writable through a profile update.
PROTECTED_FIELDS = ("id", "password", "password_hash", "role", "created_at")


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def create_user(self, data: RegisterRequest) -> User:
        email = data.email.lower()
        if self.get_user_by_email(email):
            logger.info("Registration rejected: %s already registered", email)
            raise ConflictError("Email already registered")

        user = User(
            id=str(uuid.uuid4()),
            email=email,
            password_hash=security.hash_password(data.password),
            first_name=data.first_name,
            last_name=data.last_name,
            phone=data.phone,
            role=data.role,
            department=data.department,
            roll_number=data.roll_number,
            cgpa=data.cgpa,
            skills=list(data.skills),
            created_at=utc_now(),
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email.
            self.db.rollback()
            raise ConflictError("Email already registered")
        self.db.refresh(user)
        logger.info("Registered %s user %s", user.role, user.id)
        return user

    def authenticate(self, email: str, password: str) -> User:
        user = self.get_user_by_email(email)
        if not user or not self.verify_password(password, user.password_hash):
            logger.info("Failed login attempt for %s", email)
            raise AuthenticationError("Invalid credentials")
        return user

    @staticmethod
    def verify_password(password: str, password_hash: str) -> bool:
        return security.verify_password(password_hash, password)

    def get_user(self, user_id: str) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError("User not found")
        return user

    def get_user_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email.lower()).first()

    def update_user(self, user_id: str, updates: ProfileUpdate) -> User:
        user = self.get_user(user_id)

        update_data = updates.model_dump(exclude_unset=True)
        for field in PROTECTED_FIELDS:
            update_data.pop(field, None)

        if update_data.get("email"):
            new_email = update_data["email"].lower()
            if new_email != user.email:
                existing = self.get_user_by_email(new_email)
                if existing and existing.id != user.id:
                    raise ConflictError("Email already registered")
            update_data["email"] = new_email

        for key, value in update_data.items():
            if value is None and key in ("email", "first_name", "last_name"):
                continue
            setattr(user, key, value)

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Email already registered")
        self.db.refresh(user)
        return user

    def get_users_by_department(self, department: str) -> list[User]:
        return (
            self.db.query(User)
            .filter(User.department == department, User.role == "student")
            .order_by(User.last_name, User.first_name)
            .all()
        )

    def list_users(self, role: str | None = None) -> list[User]:
        query = self.db.query(User)
        if role:
            query = query.filter(User.role == role)
        return query.order_by(User.created_at.desc()).all()
