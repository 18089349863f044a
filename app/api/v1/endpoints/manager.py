# File: app/api/v1/endpoints/manager.py
import math
from typing import Any, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app import crud, schemas
from app.api import deps
from app.core.config import settings
from app.db.database import get_db
from app.models.user import User, UserRole
from app.services import report_service, stock_ledger

router = APIRouter()

manager_only = deps.require_roles(UserRole.MANAGER)


@router.post("/stockIn")
def stock_in(
    movement: schemas.StockMovementRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(manager_only),
) -> Any:
    result = stock_ledger.stock_in(
        db,
        product_id=movement.product_id,
        quantity=movement.quantity,
        reference=movement.reference,
        performed_by=current_user,
    )
    return {"success": True, "message": "Stock added successfully", "data": result.to_response()}


@router.post("/stockOut")
def stock_out(
    movement: schemas.StockMovementRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(manager_only),
) -> Any:
    result = stock_ledger.stock_out(
        db,
        product_id=movement.product_id,
        quantity=movement.quantity,
        reference=movement.reference,
        performed_by=current_user,
    )
    return {"success": True, "message": "Stock removed successfully", "data": result.to_response()}


@router.get("/validateStock")
def validate_stock_level(
    db: Session = Depends(get_db),
    current_user: User = Depends(manager_only),
) -> Any:
    return {"success": True, "data": report_service.validate_stock_levels(db)}


@router.get("/generateReport")
def generate_report(
    db: Session = Depends(get_db),
    current_user: User = Depends(manager_only),
    type: str = Query("inventory", description="inventory, transactions or lowStock"),
) -> Any:
    return {"success": True, "data": report_service.generate_report(db, type)}


@router.get("/transactions")
def get_transactions(
    db: Session = Depends(get_db),
    current_user: User = Depends(manager_only),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    page: int = Query(1, ge=1),
    type: Optional[str] = Query(None),
    product_id: Optional[int] = Query(None, alias="productId"),
) -> Any:
    """Transaction history, newest first"""
    items, total = crud.transaction.get_page(
        db, type=type, product_id=product_id, page=page, limit=limit
    )
    return {
        "success": True,
        "data": [schemas.serialize(schemas.Transaction, t) for t in items],
        "pagination": {
            "total": total,
            "page": page,
            "limit": limit,
            "totalPages": math.ceil(total / limit),
        },
    }
