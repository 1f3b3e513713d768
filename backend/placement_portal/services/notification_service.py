import logging
import uuid

from sqlalchemy.orm import Session

from placement_portal.models.notification import Notification
from placement_portal.utils.clock import utc_now

logger = logging.getLogger(__name__)

NOTIFICATION_TYPES = {"job_alert", "application_update", "general"}


class NotificationService:
    def __init__(self, db: Session):
        self.db = db

    def create_notification(
        self, user_id: str, title: str, message: str, type: str = "general", commit: bool = True
    ) -> Notification:
        """Queue a notification for ``user_id``.

        Pass ``commit=False`` to let the caller commit it together with the
        change that triggered it.
        """
        if type not in NOTIFICATION_TYPES:
            type = "general"
        notification = Notification(
            id=str(uuid.uuid4()),
            user_id=user_id,
            title=title,
            message=message,
            type=type,
            is_read=False,
            created_at=utc_now(),
        )
        self.db.add(notification)
        if commit:
            self.db.commit()
            self.db.refresh(notification)
        return notification

    def get_notifications_by_user(self, user_id: str) -> list[Notification]:
        return (
            self.db.query(Notification)
            .filter(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc())
            .all()
        )

    def mark_notification_as_read(self, notification_id: str, user_id: str) -> bool:
        notification = (
            self.db.query(Notification)
            .filter(Notification.id == notification_id, Notification.user_id == user_id)
            .first()
        )
        if not notification:
            return False
        notification.is_read = True
        self.db.commit()
        return True

    def mark_all_as_read(self, user_id: str) -> int:
        count = (
            self.db.query(Notification)
            .filter(Notification.user_id == user_id, Notification.is_read.is_(False))
            .update({Notification.is_read: True}, synchronize_session=False)
        )
        self.db.commit()
        return count

    def get_unread_notification_count(self, user_id: str) -> int:
        return (
            self.db.query(Notification)
            .filter(Notification.user_id == user_id, Notification.is_read.is_(False))
            .count()
        )
