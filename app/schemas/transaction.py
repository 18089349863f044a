# File: app/schemas/transaction.py
from typing import Optional
from datetime import datetime
from app.schemas.base import CamelModel
from app.schemas.product import ProductBrief
from app.schemas.user import UserBrief


class StockMovementRequest(CamelModel):
    # Presence and positivity are checked by the ledger so they surface as 400s
    product_id: Optional[int] = None
    quantity: Optional[int] = None
    reference: Optional[str] = None


class TransactionCreate(CamelModel):
    product_id: int
    type: str
    quantity: int
    reference: Optional[str] = None
    performed_by_id: int
    previous_stock: int
    new_stock: int
    status: str


class OrderStatusUpdate(CamelModel):
    status: Optional[str] = None


class Transaction(CamelModel):
    id: int
    product_id: int
    type: str
    quantity: int
    reference: Optional[str] = None
    performed_by_id: int
    previous_stock: int
    new_stock: int
    status: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    product: Optional[ProductBrief] = None
    performed_by: Optional[UserBrief] = None
