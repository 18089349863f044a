# File: app/crud/audit.py
from typing import List
from sqlalchemy import desc
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.audit import Audit
from app.schemas.audit import AuditCreate, AuditUpdate


class CRUDAudit(CRUDBase[Audit, AuditCreate, AuditUpdate]):

    def get_reports(self, db: Session, *, limit: int = 50) -> List[Audit]:
        return db.query(Audit).order_by(desc(Audit.date), desc(Audit.id)).limit(limit).all()

    def count_by_status(self, db: Session, *, status: str) -> int:
        return db.query(Audit).filter(Audit.status == status).count()


audit = CRUDAudit(Audit)
