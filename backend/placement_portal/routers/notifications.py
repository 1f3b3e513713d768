from fastapi import APIRouter, Depends

from placement_portal.dependencies import get_current_user, get_notification_service
from placement_portal.errors import NotFoundError
from placement_portal.models.notification import Notification
from placement_portal.schemas.notification import NotificationResponse, UnreadCountResponse
from placement_portal.services.actor import Actor
from placement_portal.services.notification_service import NotificationService

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _notification_to_response(notification: Notification) -> NotificationResponse:
    return NotificationResponse(
        id=notification.id,
        user_id=notification.user_id,
        title=notification.title,
        message=notification.message,
        type=notification.type,
        is_read=bool(notification.is_read),
        created_at=notification.created_at,
    )


@router.get("", response_model=list[NotificationResponse])
def list_notifications(
    actor: Actor = Depends(get_current_user),
    notifications: NotificationService = Depends(get_notification_service),
):
    return [_notification_to_response(n) for n in notifications.get_notifications_by_user(actor.id)]


@router.get("/unread-count", response_model=UnreadCountResponse)
def unread_count(
    actor: Actor = Depends(get_current_user),
    notifications: NotificationService = Depends(get_notification_service),
):
    return UnreadCountResponse(count=notifications.get_unread_notification_count(actor.id))


@router.put("/read-all")
def mark_all_read(
    actor: Actor = Depends(get_current_user),
    notifications: NotificationService = Depends(get_notification_service),
):
    count = notifications.mark_all_as_read(actor.id)
    return {"message": "Notifications marked as read", "count": count}


@router.put("/{notification_id}/read")
def mark_read(
    notification_id: str,
    actor: Actor = Depends(get_current_user),
    notifications: NotificationService = Depends(get_notification_service),
):
    if not notifications.mark_notification_as_read(notification_id, actor.id):
        raise NotFoundError("Notification not found")
    return {"message": "Notification marked as read"}
