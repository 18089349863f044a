# File: app/services/stock_status.py
"""
Status deriver.

A product's ``status`` is never authoritative on its own: it is recomputed
from ``stock`` and ``low_stock_threshold`` at every ORM write site (product
create/update and the stock ledger). Writes that bypass these paths, such as
bulk ``query.update()`` calls, can leave a stale status behind; the audit
engine exists to report those.
"""
from app.models.product import Product, ProductStatus


def derive_status(stock: int, low_stock_threshold: int) -> str:
    if stock == 0:
        return ProductStatus.OUT_OF_STOCK.value
    if stock <= low_stock_threshold:
        return ProductStatus.LOW_STOCK.value
    return ProductStatus.IN_STOCK.value


def apply_status(product: Product) -> Product:
    """Overwrite product.status with the derived value, ignoring whatever the caller set"""
    product.status = derive_status(product.stock, product.low_stock_threshold)
    return product


def is_low_stock(product: Product) -> bool:
    """Clerk view of 'needs reordering': at or under threshold, out-of-stock included"""
    return product.stock <= product.low_stock_threshold
