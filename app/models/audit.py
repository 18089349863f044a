# File: app/models/audit.py
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON, Index
from sqlalchemy.orm import relationship
from app.models.base import BaseModel, utcnow
import enum


class AuditStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class Severity(str, enum.Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Audit(BaseModel):
    __tablename__ = "audits"
    __table_args__ = (
        Index("ix_audits_status_date", "status", "date"),
    )

    title = Column(String(255), nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    status = Column(String(20), nullable=False, default=AuditStatus.SCHEDULED.value)
    discrepancies = Column(Integer, nullable=False, default=0)
    # [{productId, productName, sku, currentStock, status, discrepancies: [{type, message, severity}]}]
    discrepancy_details = Column(JSON, nullable=False, default=list)
    notes = Column(Text, nullable=False, default="")
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    created_by = relationship("User")
