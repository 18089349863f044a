from .user import user
from .product import product
from .transaction import transaction
from .audit import audit
from .notification import notification

__all__ = ["user", "product", "transaction", "audit", "notification"]
