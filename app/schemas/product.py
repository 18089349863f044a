# File: app/schemas/product.py
from typing import Optional
from datetime import datetime
from pydantic import Field
from app.schemas.base import CamelModel


class ProductBrief(CamelModel):
    id: int
    name: str
    sku: str
    category: str


class ProductBase(CamelModel):
    name: str = Field(min_length=1)
    sku: str = Field(min_length=1)
    category: str = Field(min_length=1)
    stock: int = Field(default=0, ge=0)
    price: float = Field(default=0, ge=0)
    description: Optional[str] = None


class ProductCreate(ProductBase):
    # Falls back to settings.DEFAULT_LOW_STOCK_THRESHOLD
    low_stock_threshold: Optional[int] = Field(default=None, ge=0)


class ProductUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = Field(default=None, min_length=1)
    stock: Optional[int] = Field(default=None, ge=0)
    price: Optional[float] = Field(default=None, ge=0)
    description: Optional[str] = None
    low_stock_threshold: Optional[int] = Field(default=None, ge=0)


class Product(CamelModel):
    id: int
    name: str
    sku: str
    category: str
    stock: int
    price: float
    description: Optional[str] = None
    status: str
    low_stock_threshold: int
    added_by_id: Optional[int] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
