from .base import BaseModel
from .user import User, UserRole
from .product import Product, ProductStatus
from .transaction import Transaction, TransactionType, TransactionStatus
from .audit import Audit, AuditStatus, Severity
from .notification import Notification, NotificationType
