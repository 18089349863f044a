# File: app/api/v1/endpoints/products.py
import logging
from typing import Any, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from app import crud, schemas
from app.api import deps
from app.core.exceptions import NotFoundError
from app.db.database import get_db
from app.models.product import Product
from app.models.user import User, UserRole

logger = logging.getLogger(__name__)
router = APIRouter()

can_edit_products = deps.require_roles(UserRole.ADMIN, UserRole.MANAGER)


def _get_product_or_404(db: Session, product_id: int) -> Product:
    product = crud.product.get(db, id=product_id)
    if not product:
        raise NotFoundError("Product not found")
    return product


def _listing(products) -> dict:
    return {
        "success": True,
        "count": len(products),
        "data": [schemas.serialize(schemas.Product, p) for p in products],
    }


@router.get("/")
def list_products(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
    category: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Case-insensitive match on name or SKU"),
) -> Any:
    products = crud.product.get_filtered(db, category=category, status=status, search=search)
    return _listing(products)


@router.get("/low-stock")
def list_low_stock_products(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    """Products whose stored status is low-stock or out-of-stock"""
    return _listing(crud.product.get_flagged_low_stock(db))


@router.get("/{product_id}")
def get_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    product = _get_product_or_404(db, product_id)
    return {"success": True, "data": schemas.serialize(schemas.Product, product)}


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_product(
    product_in: schemas.ProductCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(can_edit_products),
) -> Any:
    product = crud.product.create_with_owner(db, obj_in=product_in, added_by_id=current_user.id)
    logger.info(f"Product {product.sku} created by user {current_user.id}")
    return {
        "success": True,
        "data": schemas.serialize(schemas.Product, product),
        "message": "Product created successfully",
    }


@router.put("/{product_id}")
def update_product(
    product_id: int,
    product_in: schemas.ProductUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(can_edit_products),
) -> Any:
    product = _get_product_or_404(db, product_id)
    product = crud.product.update(db, db_obj=product, obj_in=product_in)
    return {
        "success": True,
        "data": schemas.serialize(schemas.Product, product),
        "message": "Product updated successfully",
    }


@router.delete("/{product_id}")
def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_roles(UserRole.ADMIN)),
) -> Any:
    product = _get_product_or_404(db, product_id)
    crud.product.remove(db, id=product.id)
    logger.info(f"Product {product_id} deleted by admin {current_user.id}")
    return {"success": True, "message": "Product deleted successfully"}
