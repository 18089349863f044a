# File: app/api/v1/endpoints/clerk.py
import logging
from typing import Any, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app import crud, schemas
from app.api import deps
from app.core.exceptions import NotFoundError, ValidationError
from app.db.database import get_db
from app.models.notification import NotificationType
from app.models.transaction import Transaction, TransactionStatus
from app.models.user import User, UserRole
from app.services import report_service
from app.services.notification_service import notify_role
from app.services.stock_status import is_low_stock

logger = logging.getLogger(__name__)
router = APIRouter()

clerk_only = deps.require_roles(UserRole.CLERK)

ORDER_STATUSES = [s.value for s in TransactionStatus]


class ReorderRequest(schemas.CamelModel):
    product_id: Optional[int] = None


def order_number(transaction_id: int) -> str:
    return f"ORD-{transaction_id:06d}"


def _order_row(t: Transaction) -> dict:
    performer = t.performed_by
    return {
        "id": t.id,
        "orderNo": order_number(t.id),
        "productId": t.product_id,
        "productName": t.product.name,
        "sku": t.product.sku,
        "category": t.product.category,
        "quantity": t.quantity,
        "type": t.type,
        "previousStock": t.previous_stock,
        "newStock": t.new_stock,
        "reference": t.reference,
        "status": t.status,
        "customer": performer.full_name if performer else "System",
        "performedBy": {
            "name": performer.full_name if performer else "System",
            "email": performer.email if performer else None,
            "role": performer.role if performer else None,
        },
        "createdAt": t.created_at,
        "updatedAt": t.updated_at,
    }


@router.get("/stats")
def get_dashboard_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(clerk_only),
) -> Any:
    return {"success": True, "data": report_service.clerk_dashboard_stats(db)}


@router.get("/lowStock")
def get_low_stock_products(
    db: Session = Depends(get_db),
    current_user: User = Depends(clerk_only),
) -> Any:
    """Products at or under their threshold, out-of-stock included"""
    products = [p for p in crud.product.get_all(db) if is_low_stock(p)]
    data = []
    for p in products:
        row = schemas.serialize(schemas.Product, p)
        row["reorderLevel"] = p.low_stock_threshold
        data.append(row)
    return {"success": True, "count": len(data), "data": data}


@router.get("/orders")
def get_pending_orders(
    db: Session = Depends(get_db),
    current_user: User = Depends(clerk_only),
    status: str = Query(TransactionStatus.PENDING.value),
) -> Any:
    orders = [_order_row(t) for t in crud.transaction.get_by_status(db, status=status)]
    return {"success": True, "count": len(orders), "data": orders}


@router.put("/orders/{order_id}/status")
def update_order_status(
    order_id: int,
    status_in: schemas.OrderStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(clerk_only),
) -> Any:
    """Flip the status of a transaction; stock levels are left alone"""
    if status_in.status not in ORDER_STATUSES:
        raise ValidationError("Invalid status. Must be: pending, completed, or rejected")

    transaction = crud.transaction.get(db, id=order_id)
    if not transaction:
        raise NotFoundError("Order not found")

    previous_status = transaction.status
    transaction = crud.transaction.update_status(db, db_obj=transaction, status=status_in.status)
    logger.info(f"Order {order_number(transaction.id)} {previous_status} -> {transaction.status}")
    return {
        "success": True,
        "message": "Order status updated successfully",
        "data": {
            "id": transaction.id,
            "orderNo": order_number(transaction.id),
            "productName": transaction.product.name,
            "sku": transaction.product.sku,
            "previousStatus": previous_status,
            "status": transaction.status,
            "updatedAt": transaction.updated_at,
        },
    }


@router.post("/reorder")
def request_reorder(
    reorder: ReorderRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(clerk_only),
) -> Any:
    """Ask every manager to restock a product"""
    if not reorder.product_id:
        raise ValidationError("Product ID is required")

    product = crud.product.get(db, id=reorder.product_id)
    if not product:
        raise NotFoundError("Product not found")

    sent = notify_role(
        db,
        role=UserRole.MANAGER,
        message=(
            f"Reorder request for {product.name} (current stock: {product.stock} units). "
            f"SKU: {product.sku}"
        ),
        notification_type=NotificationType.REORDER.value,
        sender_id=current_user.id,
        product_id=product.id,
        metadata={
            "productName": product.name,
            "sku": product.sku,
            "currentStock": product.stock,
            "reorderLevel": product.low_stock_threshold,
            "category": product.category,
        },
    )
    return {
        "success": True,
        "message": "Reorder request sent successfully",
        "data": {
            "product": {
                "id": product.id,
                "name": product.name,
                "sku": product.sku,
                "currentStock": product.stock,
            },
            "notificationsSent": len(sent),
        },
    }
