# File: app/schemas/notification.py
from typing import Any, Dict, Optional
from app.schemas.base import CamelModel


class NotificationSendRequest(CamelModel):
    recipient_id: Optional[int] = None
    message: Optional[str] = None
    type: Optional[str] = None
    product_id: Optional[int] = None
    metadata: Optional[Dict[str, Any]] = None
