# File: app/schemas/audit.py
from typing import Any, Dict, List, Optional
from datetime import datetime
from app.schemas.base import CamelModel
from app.schemas.user import UserBrief


class ScheduleAuditRequest(CamelModel):
    title: Optional[str] = None
    date: Optional[datetime] = None
    notes: Optional[str] = None


class AuditCreate(CamelModel):
    title: str
    date: datetime
    status: str
    discrepancies: int = 0
    discrepancy_details: List[Dict[str, Any]] = []
    notes: str = ""
    created_by_id: int


class AuditUpdate(CamelModel):
    status: Optional[str] = None
    discrepancies: Optional[int] = None
    discrepancy_details: Optional[List[Dict[str, Any]]] = None


class AuditReport(CamelModel):
    """Row of the audit history list"""
    id: int
    title: str
    date: datetime
    status: str
    discrepancies: int = 0


class Audit(AuditReport):
    discrepancy_details: List[Dict[str, Any]] = []
    notes: str = ""
    created_by_id: int
    created_by: Optional[UserBrief] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
