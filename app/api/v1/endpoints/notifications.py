# File: app/api/v1/endpoints/notifications.py
from typing import Any, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from app import crud, schemas
from app.api import deps
from app.core.config import settings
from app.core.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from app.db.database import get_db
from app.models.notification import Notification, NotificationType
from app.models.user import User
from app.services.notification_service import can_access, recipient_scope

router = APIRouter()


def _notification_row(n: Notification) -> dict:
    return {
        "id": n.id,
        "recipientId": n.recipient_id,
        "message": n.message,
        "type": n.type,
        "isRead": n.is_read,
        "readAt": n.read_at,
        "metadata": n.extra_data or {},
        "sender": schemas.serialize(schemas.UserBrief, n.sender) if n.sender else None,
        "relatedProduct": (
            schemas.serialize(schemas.ProductBrief, n.related_product) if n.related_product else None
        ),
        "createdAt": n.created_at,
    }


@router.post("/send", status_code=status.HTTP_201_CREATED)
def send_notification(
    notification_in: schemas.NotificationSendRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    if not notification_in.recipient_id or not notification_in.message:
        raise ValidationError("Recipient ID and message are required")

    if not crud.user.get(db, id=notification_in.recipient_id):
        raise NotFoundError("Recipient not found")

    notification = crud.notification.send(
        db,
        recipient_id=notification_in.recipient_id,
        message=notification_in.message,
        type=notification_in.type or NotificationType.SYSTEM.value,
        sender_id=current_user.id,
        product_id=notification_in.product_id,
        metadata=notification_in.metadata,
    )
    return {
        "success": True,
        "message": "Notification sent successfully",
        "data": _notification_row(notification),
    }


@router.get("/")
def get_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
    is_read: Optional[bool] = Query(None, alias="isRead"),
    type: Optional[str] = Query(None),
    limit: int = Query(settings.NOTIFICATION_FEED_LIMIT, ge=1),
) -> Any:
    """Newest-first feed; admins see every notification"""
    scope = recipient_scope(current_user)
    notifications = crud.notification.get_feed(
        db, recipient_id=scope, is_read=is_read, type=type, limit=limit
    )
    return {
        "success": True,
        "data": [_notification_row(n) for n in notifications],
        "unreadCount": crud.notification.get_unread_count(db, recipient_id=scope),
    }


@router.get("/unread-count")
def get_unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    count = crud.notification.get_unread_count(db, recipient_id=recipient_scope(current_user))
    return {"success": True, "data": {"count": count}}


@router.put("/read-all")
def mark_all_as_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    modified = crud.notification.mark_all_as_read(db, recipient_id=recipient_scope(current_user))
    return {
        "success": True,
        "message": "All notifications marked as read",
        "data": {"modifiedCount": modified},
    }


@router.put("/{notification_id}/read")
def mark_as_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    notification = crud.notification.get(db, id=notification_id)
    if not notification:
        raise NotFoundError("Notification not found")
    if not can_access(current_user, notification):
        raise PermissionDeniedError("Not authorized to update this notification")

    notification = crud.notification.mark_as_read(db, notification_id=notification_id)
    return {
        "success": True,
        "message": "Notification marked as read",
        "data": _notification_row(notification),
    }
