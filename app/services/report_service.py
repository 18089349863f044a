# File: app/services/report_service.py
"""Read-only report and stock-health snapshots assembled from current state."""
from datetime import datetime, timezone
from typing import Callable, Dict
from sqlalchemy.orm import Session
from app import crud
from app.core.config import settings
from app.core.exceptions import ValidationError
from app.models.product import Product
from app.models.transaction import Transaction, TransactionStatus, TransactionType
from app.models.base import utcnow
from app.services.stock_status import is_low_stock


def _start_of_today() -> datetime:
    return datetime.now(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)


def _product_row(p: Product) -> dict:
    return {
        "id": p.id,
        "name": p.name,
        "sku": p.sku,
        "category": p.category,
        "stock": p.stock,
        "price": p.price,
        "status": p.status,
        "lowStockThreshold": p.low_stock_threshold,
    }


def _transaction_row(t: Transaction) -> dict:
    return {
        "id": t.id,
        "product": t.product.name,
        "productId": t.product_id,
        "sku": t.product.sku,
        "category": t.product.category,
        "type": t.type,
        "quantity": t.quantity,
        "date": t.created_at,
        "reference": t.reference,
        "performedBy": t.performed_by.full_name,
        "performedByEmail": t.performed_by.email,
        "role": t.performed_by.role,
        "previousStock": t.previous_stock,
        "newStock": t.new_stock,
        "status": t.status,
    }


def inventory_report(db: Session) -> dict:
    products = crud.product.get_all(db, order_by=Product.name)
    transactions = crud.transaction.get_recent(db, limit=settings.RECENT_TRANSACTIONS_LIMIT)
    return {
        "type": "inventory",
        "generatedAt": utcnow(),
        "summary": {
            "totalProducts": len(products),
            "totalStock": sum(p.stock for p in products),
            "inStock": len([p for p in products if p.stock > 0]),
            "outOfStock": len([p for p in products if p.stock == 0]),
            "lowStock": len([p for p in products if 0 < p.stock <= p.low_stock_threshold]),
        },
        "products": [_product_row(p) for p in products],
        "recentTransactions": [_transaction_row(t) for t in transactions],
    }


def transactions_report(db: Session) -> dict:
    transactions = crud.transaction.get_recent(db)
    totals = crud.transaction.quantity_totals(db)
    return {
        "type": "transactions",
        "generatedAt": utcnow(),
        "summary": {
            "totalTransactions": len(transactions),
            "todayTransactions": crud.transaction.count_since(db, since=_start_of_today()),
            "stockIn": totals[TransactionType.IN.value]["count"],
            "stockOut": totals[TransactionType.OUT.value]["count"],
            "totalQuantityIn": totals[TransactionType.IN.value]["quantity"],
            "totalQuantityOut": totals[TransactionType.OUT.value]["quantity"],
        },
        "transactions": [_transaction_row(t) for t in transactions],
    }


def low_stock_report(db: Session) -> dict:
    products = [p for p in crud.product.get_all(db, order_by=Product.stock) if is_low_stock(p)]
    return {
        "type": "lowStock",
        "generatedAt": utcnow(),
        "summary": {
            "totalLowStockItems": len(products),
            "criticalItems": len([p for p in products if p.stock == 0]),
            "warningItems": len([p for p in products if p.stock > 0]),
        },
        "products": [
            {
                "id": p.id,
                "name": p.name,
                "sku": p.sku,
                "category": p.category,
                "stock": p.stock,
                "lowStockThreshold": p.low_stock_threshold,
                "status": p.status,
                "needsAttention": True,
            }
            for p in products
        ],
    }


REPORTS: Dict[str, Callable[[Session], dict]] = {
    "inventory": inventory_report,
    "transactions": transactions_report,
    "lowStock": low_stock_report,
}


def generate_report(db: Session, report_type: str) -> dict:
    builder = REPORTS.get(report_type)
    if builder is None:
        raise ValidationError("Invalid report type. Use: inventory, transactions, or lowStock")
    return builder(db)


def validate_stock_levels(db: Session) -> dict:
    products = crud.product.get_all(db)
    summary = {"totalProducts": len(products), "lowStock": 0, "outOfStock": 0, "healthy": 0}
    issues = []

    for p in products:
        if p.stock == 0:
            summary["outOfStock"] += 1
            issue = "out-of-stock"
        elif p.stock <= p.low_stock_threshold:
            summary["lowStock"] += 1
            issue = "low-stock"
        else:
            summary["healthy"] += 1
            continue
        issues.append({
            "productId": p.id,
            "name": p.name,
            "sku": p.sku,
            "issue": issue,
            "currentStock": p.stock,
            "threshold": p.low_stock_threshold,
        })

    return {
        "summary": summary,
        "issues": issues,
        "hasIssues": len(issues) > 0,
        "timestamp": utcnow(),
    }


def admin_dashboard_stats(db: Session) -> dict:
    products = crud.product.get_all(db)
    total_value = sum(p.stock * p.price for p in products)
    return {
        "totalProducts": len(products),
        "lowStockItems": crud.product.count_flagged_low_stock(db),
        "activeUsers": crud.user.count(db),
        "totalValue": round(total_value, 2),
    }


def clerk_dashboard_stats(db: Session) -> dict:
    products = crud.product.get_all(db)
    return {
        "lowStockItems": len([p for p in products if is_low_stock(p)]),
        "pendingOrders": crud.transaction.count_by_status(db, status=TransactionStatus.PENDING.value),
        "totalProducts": len(products),
        "outOfStock": len([p for p in products if p.stock == 0]),
    }
