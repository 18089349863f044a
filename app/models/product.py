# File: app/models/product.py
from sqlalchemy import Column, Integer, String, Text, Float, ForeignKey
from sqlalchemy.orm import relationship
from app.models.base import BaseModel
import enum


class ProductStatus(str, enum.Enum):
    IN_STOCK = "in-stock"
    LOW_STOCK = "low-stock"
    OUT_OF_STOCK = "out-of-stock"


class Product(BaseModel):
    __tablename__ = "products"

    name = Column(String(255), nullable=False)
    sku = Column(String(100), unique=True, index=True, nullable=False)
    category = Column(String(100), nullable=False, index=True)
    stock = Column(Integer, nullable=False, default=0)
    price = Column(Float, nullable=False, default=0)
    description = Column(Text, nullable=True)
    # Derived from stock/low_stock_threshold by app.services.stock_status on every ORM write
    status = Column(String(20), nullable=False, default=ProductStatus.IN_STOCK.value, index=True)
    low_stock_threshold = Column(Integer, nullable=False, default=10)
    added_by_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    version = Column(Integer, nullable=False)

    added_by = relationship("User")
    transactions = relationship(
        "Transaction", back_populates="product", cascade="all, delete-orphan"
    )

    # Optimistic locking: a stale concurrent write raises StaleDataError
    __mapper_args__ = {"version_id_col": version}
