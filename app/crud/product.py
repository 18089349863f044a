# File: app/crud/product.py
from typing import Any, Dict, List, Optional, Union
from sqlalchemy import or_
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError
from app.core.config import settings
from app.core.exceptions import ConflictError, ValidationError
from app.crud.base import CRUDBase
from app.models.product import Product, ProductStatus
from app.schemas.product import ProductCreate, ProductUpdate
from app.services.stock_status import apply_status

FLAGGED_STATUSES = [ProductStatus.LOW_STOCK.value, ProductStatus.OUT_OF_STOCK.value]


class CRUDProduct(CRUDBase[Product, ProductCreate, ProductUpdate]):

    def get_by_sku(self, db: Session, *, sku: str) -> Optional[Product]:
        return db.query(Product).filter(Product.sku == sku).first()

    def get_filtered(
        self,
        db: Session,
        *,
        category: Optional[str] = None,
        status: Optional[str] = None,
        search: Optional[str] = None
    ) -> List[Product]:
        query = db.query(Product)
        if category:
            query = query.filter(Product.category == category)
        if status:
            query = query.filter(Product.status == status)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(Product.name.ilike(pattern), Product.sku.ilike(pattern)))
        return query.order_by(Product.id).all()

    def get_all(self, db: Session, *, order_by=None) -> List[Product]:
        return db.query(Product).order_by(order_by if order_by is not None else Product.id).all()

    def get_flagged_low_stock(self, db: Session) -> List[Product]:
        """Products whose stored status says low or out of stock"""
        return db.query(Product).filter(Product.status.in_(FLAGGED_STATUSES)).order_by(Product.id).all()

    def count_flagged_low_stock(self, db: Session) -> int:
        return db.query(Product).filter(Product.status.in_(FLAGGED_STATUSES)).count()

    def create_with_owner(self, db: Session, *, obj_in: ProductCreate, added_by_id: Optional[int]) -> Product:
        if self.get_by_sku(db, sku=obj_in.sku):
            raise ValidationError("Product with this SKU already exists")

        obj_data = obj_in.model_dump()
        if obj_data.get("low_stock_threshold") is None:
            obj_data["low_stock_threshold"] = settings.DEFAULT_LOW_STOCK_THRESHOLD
        db_obj = Product(**obj_data, added_by_id=added_by_id)
        apply_status(db_obj)
        db.add(db_obj)
        self._commit(db)
        db.refresh(db_obj)
        return db_obj

    def update(
        self,
        db: Session,
        *,
        db_obj: Product,
        obj_in: Union[ProductUpdate, Dict[str, Any]]
    ) -> Product:
        if isinstance(obj_in, dict):
            update_data = dict(obj_in)
        else:
            update_data = obj_in.model_dump(exclude_unset=True)
        # status is derived, never taken from the caller
        update_data.pop("status", None)
        for field, value in update_data.items():
            if value is not None and hasattr(db_obj, field):
                setattr(db_obj, field, value)
        apply_status(db_obj)
        db.add(db_obj)
        self._commit(db)
        db.refresh(db_obj)
        return db_obj

    def set_stock(self, db: Session, *, db_obj: Product, stock: int) -> Product:
        """Write a new stock level and re-derive status"""
        return self.update(db, db_obj=db_obj, obj_in={"stock": stock})

    def _commit(self, db: Session) -> None:
        try:
            db.commit()
        except StaleDataError:
            db.rollback()
            raise ConflictError("Product was modified concurrently, please retry")


product = CRUDProduct(Product)
