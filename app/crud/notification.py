# File: app/crud/notification.py
import logging
from typing import Any, Dict, List, Optional, Union
from sqlalchemy import desc
from sqlalchemy.orm import Session, joinedload
from app.core.exceptions import ValidationError
from app.crud.base import CRUDBase
from app.models.base import utcnow
from app.models.notification import Notification, NotificationType
from app.schemas.notification import NotificationSendRequest

logger = logging.getLogger(__name__)

# Recipient scope that widens every query to the whole feed (used for admins)
GLOBAL_FEED = "all"

RecipientScope = Union[int, str]

NOTIFICATION_TYPES = [t.value for t in NotificationType]


class CRUDNotification(CRUDBase[Notification, NotificationSendRequest, NotificationSendRequest]):

    def send(
        self,
        db: Session,
        *,
        recipient_id: int,
        message: str,
        type: str = NotificationType.SYSTEM.value,
        sender_id: Optional[int] = None,
        product_id: Optional[int] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Notification:
        """Create one notification row. No delivery tracking beyond the row itself."""
        if type not in NOTIFICATION_TYPES:
            raise ValidationError(f"Invalid notification type. Use: {', '.join(NOTIFICATION_TYPES)}")

        notification = Notification(
            recipient_id=recipient_id,
            sender_id=sender_id,
            message=message,
            type=type,
            related_product_id=product_id,
            extra_data=metadata or {},
        )
        db.add(notification)
        db.commit()
        db.refresh(notification)

        logger.info(f"[Notification {notification.id}] [{type.upper()}] {message}")
        return notification

    def _scoped(self, db: Session, recipient_id: RecipientScope):
        query = db.query(Notification)
        if recipient_id != GLOBAL_FEED:
            query = query.filter(Notification.recipient_id == recipient_id)
        return query

    def get_feed(
        self,
        db: Session,
        *,
        recipient_id: RecipientScope,
        is_read: Optional[bool] = None,
        type: Optional[str] = None,
        limit: int = 50
    ) -> List[Notification]:
        """Newest-first notifications for a recipient (or every recipient for GLOBAL_FEED)"""
        query = self._scoped(db, recipient_id).options(
            joinedload(Notification.sender),
            joinedload(Notification.related_product),
        )
        if is_read is not None:
            query = query.filter(Notification.is_read == is_read)
        if type:
            query = query.filter(Notification.type == type)
        return query.order_by(desc(Notification.created_at), desc(Notification.id)).limit(limit).all()

    def mark_as_read(self, db: Session, *, notification_id: int) -> Optional[Notification]:
        notification = self.get(db, id=notification_id)
        if notification and not notification.is_read:
            notification.is_read = True
            notification.read_at = utcnow()
            db.commit()
            db.refresh(notification)
        return notification

    def mark_all_as_read(self, db: Session, *, recipient_id: RecipientScope) -> int:
        """Mark all unread notifications in scope as read, returning how many changed"""
        result = (
            self._scoped(db, recipient_id)
            .filter(Notification.is_read == False)
            .update({"is_read": True, "read_at": utcnow()}, synchronize_session=False)
        )
        db.commit()
        return result

    def get_unread_count(self, db: Session, *, recipient_id: RecipientScope) -> int:
        return self._scoped(db, recipient_id).filter(Notification.is_read == False).count()


notification = CRUDNotification(Notification)
