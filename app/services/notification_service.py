# File: app/services/notification_service.py
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from app import crud
from app.crud.notification import GLOBAL_FEED, RecipientScope
from app.models.notification import Notification
from app.models.user import User, UserRole
import logging

logger = logging.getLogger(__name__)


def recipient_scope(user: User) -> RecipientScope:
    """Admins read the global feed, everybody else only their own notifications"""
    if user.role == UserRole.ADMIN.value:
        return GLOBAL_FEED
    return user.id


def can_access(user: User, notification: Notification) -> bool:
    return user.role == UserRole.ADMIN.value or notification.recipient_id == user.id


def notify_role(
    db: Session,
    *,
    role: UserRole,
    message: str,
    notification_type: str,
    sender_id: Optional[int] = None,
    product_id: Optional[int] = None,
    metadata: Optional[Dict[str, Any]] = None
) -> List[Notification]:
    """Send the same notification to every active user holding ``role``.

    Each recipient gets an independent write. A failure for one recipient is
    logged and skipped; it does not undo the others or the triggering operation.
    """
    recipients = crud.user.get_by_role(db, role=role)
    sent = []
    for recipient in recipients:
        try:
            sent.append(
                crud.notification.send(
                    db,
                    recipient_id=recipient.id,
                    message=message,
                    type=notification_type,
                    sender_id=sender_id,
                    product_id=product_id,
                    metadata=metadata,
                )
            )
        except Exception:
            db.rollback()
            logger.exception(f"Failed to notify {role.value} {recipient.id}")
    logger.info(f"Sent {len(sent)}/{len(recipients)} {notification_type} notifications to {role.value}s")
    return sent
