# File: app/models/base.py
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, DateTime
from app.db.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseModel(Base):
    __abstract__ = True

    id = Column(Integer, primary_key=True, index=True)
    # Python-side defaults keep sub-second ordering on SQLite too
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
