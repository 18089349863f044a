# File: app/services/stock_ledger.py
"""
Stock ledger: applies stock-in/stock-out movements to a product and appends
the matching transaction row.

Write order is product first, then the transaction. They are committed
separately, so a crash in between leaves the new stock level without its log
entry; no compensating write exists.
"""
import logging
import time
from dataclasses import dataclass
from typing import List, Optional
from sqlalchemy.orm import Session
from app import crud
from app.core.exceptions import InsufficientStockError, NotFoundError, ValidationError
from app.models.notification import Notification, NotificationType
from app.models.product import Product
from app.models.transaction import Transaction, TransactionStatus, TransactionType
from app.models.user import User, UserRole
from app.schemas.transaction import TransactionCreate
from app.services.notification_service import notify_role

logger = logging.getLogger(__name__)


@dataclass
class StockMovement:
    product: Product
    transaction: Transaction
    previous_stock: int
    new_stock: int
    notifications: List[Notification]

    def to_response(self) -> dict:
        return {
            "product": {
                "id": self.product.id,
                "name": self.product.name,
                "sku": self.product.sku,
                "previousStock": self.previous_stock,
                "newStock": self.new_stock,
            },
            "transaction": self.transaction.id,
            "reference": self.transaction.reference,
        }


def default_reference(movement_type: TransactionType) -> str:
    prefix = "STOCK-IN" if movement_type == TransactionType.IN else "STOCK-OUT"
    return f"{prefix}-{int(time.time() * 1000)}"


def _load_product(db: Session, product_id: Optional[int], quantity: Optional[int]) -> Product:
    if not product_id or quantity is None or quantity <= 0:
        raise ValidationError("Product ID and positive quantity are required")

    product = crud.product.get(db, id=product_id)
    if not product:
        raise NotFoundError("Product not found")
    return product


def _record(
    db: Session,
    *,
    product: Product,
    movement_type: TransactionType,
    quantity: int,
    previous_stock: int,
    new_stock: int,
    reference: Optional[str],
    performed_by: User
) -> Transaction:
    crud.product.set_stock(db, db_obj=product, stock=new_stock)

    transaction = crud.transaction.create(
        db,
        obj_in=TransactionCreate(
            product_id=product.id,
            type=movement_type.value,
            quantity=quantity,
            reference=reference or default_reference(movement_type),
            performed_by_id=performed_by.id,
            previous_stock=previous_stock,
            new_stock=new_stock,
            status=TransactionStatus.COMPLETED.value,
        ),
    )
    logger.info(
        f"Stock {movement_type.value} {product.sku}: {previous_stock} -> {new_stock} "
        f"(qty {quantity}, ref {transaction.reference}, by user {performed_by.id})"
    )
    return transaction


def stock_in(
    db: Session,
    *,
    product_id: Optional[int],
    quantity: Optional[int],
    performed_by: User,
    reference: Optional[str] = None
) -> StockMovement:
    """Increase stock and notify every clerk about the restock"""
    product = _load_product(db, product_id, quantity)

    previous_stock = product.stock
    new_stock = previous_stock + quantity
    transaction = _record(
        db,
        product=product,
        movement_type=TransactionType.IN,
        quantity=quantity,
        previous_stock=previous_stock,
        new_stock=new_stock,
        reference=reference,
        performed_by=performed_by,
    )

    notifications = notify_role(
        db,
        role=UserRole.CLERK,
        message=(
            f"{product.name} restocked successfully. New stock: {new_stock} units "
            f"({quantity} added). SKU: {product.sku}"
        ),
        notification_type=NotificationType.RESTOCK.value,
        sender_id=performed_by.id,
        product_id=product.id,
        metadata={
            "productName": product.name,
            "sku": product.sku,
            "previousStock": previous_stock,
            "newStock": new_stock,
            "quantityAdded": quantity,
        },
    )
    return StockMovement(product, transaction, previous_stock, new_stock, notifications)


def stock_out(
    db: Session,
    *,
    product_id: Optional[int],
    quantity: Optional[int],
    performed_by: User,
    reference: Optional[str] = None
) -> StockMovement:
    """Decrease stock; refuses to go below zero and leaves the product untouched"""
    product = _load_product(db, product_id, quantity)

    previous_stock = product.stock
    if previous_stock < quantity:
        raise InsufficientStockError(available=previous_stock, requested=quantity)

    new_stock = previous_stock - quantity
    transaction = _record(
        db,
        product=product,
        movement_type=TransactionType.OUT,
        quantity=quantity,
        previous_stock=previous_stock,
        new_stock=new_stock,
        reference=reference,
        performed_by=performed_by,
    )
    return StockMovement(product, transaction, previous_stock, new_stock, [])
