# File: app/crud/transaction.py
from typing import List, Optional, Tuple
from datetime import datetime
from sqlalchemy import desc, func
from sqlalchemy.orm import Session, joinedload
from app.crud.base import CRUDBase
from app.models.transaction import Transaction, TransactionType
from app.schemas.transaction import OrderStatusUpdate, TransactionCreate


class CRUDTransaction(CRUDBase[Transaction, TransactionCreate, OrderStatusUpdate]):

    def _with_relations(self, db: Session):
        return db.query(Transaction).options(
            joinedload(Transaction.product),
            joinedload(Transaction.performed_by),
        )

    def get_page(
        self,
        db: Session,
        *,
        type: Optional[str] = None,
        product_id: Optional[int] = None,
        page: int = 1,
        limit: int = 50
    ) -> Tuple[List[Transaction], int]:
        """Newest-first page of transactions plus the total matching count"""
        query = db.query(Transaction)
        if type:
            query = query.filter(Transaction.type == type)
        if product_id:
            query = query.filter(Transaction.product_id == product_id)
        total = query.count()

        items = (
            query.options(joinedload(Transaction.product), joinedload(Transaction.performed_by))
            .order_by(desc(Transaction.created_at), desc(Transaction.id))
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return items, total

    def get_recent(self, db: Session, *, limit: Optional[int] = None) -> List[Transaction]:
        query = self._with_relations(db).order_by(desc(Transaction.created_at), desc(Transaction.id))
        if limit:
            query = query.limit(limit)
        return query.all()

    def get_by_status(self, db: Session, *, status: str) -> List[Transaction]:
        return (
            self._with_relations(db)
            .filter(Transaction.status == status)
            .order_by(desc(Transaction.created_at), desc(Transaction.id))
            .all()
        )

    def count_by_status(self, db: Session, *, status: str) -> int:
        return db.query(Transaction).filter(Transaction.status == status).count()

    def count_since(self, db: Session, *, since: datetime) -> int:
        return db.query(Transaction).filter(Transaction.created_at >= since).count()

    def quantity_totals(self, db: Session) -> dict:
        """Row counts and summed quantities per movement type"""
        rows = (
            db.query(Transaction.type, func.count(Transaction.id), func.coalesce(func.sum(Transaction.quantity), 0))
            .group_by(Transaction.type)
            .all()
        )
        totals = {t.value: {"count": 0, "quantity": 0} for t in TransactionType}
        for movement_type, count, quantity in rows:
            totals[movement_type] = {"count": count, "quantity": int(quantity)}
        return totals

    def update_status(self, db: Session, *, db_obj: Transaction, status: str) -> Transaction:
        db_obj.status = status
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj


transaction = CRUDTransaction(Transaction)
