# File: app/models/transaction.py
from sqlalchemy import Column, Integer, String, ForeignKey, Index
from sqlalchemy.orm import relationship
from app.models.base import BaseModel
import enum


class TransactionType(str, enum.Enum):
    IN = "in"
    OUT = "out"


class TransactionStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    REJECTED = "rejected"


class Transaction(BaseModel):
    """Stock movement log row. Only ``status`` changes after creation."""
    __tablename__ = "transactions"
    __table_args__ = (
        Index("ix_transactions_product_created", "product_id", "created_at"),
        Index("ix_transactions_type_created", "type", "created_at"),
    )

    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    type = Column(String(10), nullable=False)
    quantity = Column(Integer, nullable=False)
    reference = Column(String(255), nullable=True)
    performed_by_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    previous_stock = Column(Integer, nullable=False)
    new_stock = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default=TransactionStatus.COMPLETED.value, index=True)

    product = relationship("Product", back_populates="transactions")
    performed_by = relationship("User")
