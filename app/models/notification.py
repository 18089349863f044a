from sqlalchemy import Column, Integer, Boolean, DateTime, Text, String, ForeignKey, JSON
from sqlalchemy.orm import relationship
from app.models.base import BaseModel
import enum


class NotificationType(str, enum.Enum):
    REORDER = "reorder"
    RESTOCK = "restock"
    AUDIT = "audit"
    SYSTEM = "system"


class Notification(BaseModel):
    __tablename__ = "notifications"

    recipient_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    sender_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    message = Column(Text, nullable=False)
    type = Column(String(20), nullable=False, default=NotificationType.SYSTEM.value)
    related_product_id = Column(Integer, ForeignKey("products.id", ondelete="SET NULL"), nullable=True)
    extra_data = Column("metadata", JSON, nullable=False, default=dict)
    is_read = Column(Boolean, nullable=False, default=False, index=True)
    read_at = Column(DateTime(timezone=True), nullable=True)

    recipient = relationship("User", foreign_keys=[recipient_id])
    sender = relationship("User", foreign_keys=[sender_id])
    related_product = relationship("Product")
