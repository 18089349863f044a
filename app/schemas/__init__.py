# File: app/schemas/__init__.py
from .base import CamelModel, serialize
from .user import User, UserBrief, UserUpdate, UserRoleChange
from .auth import LoginRequest, UserRegistrationRequest
from .product import Product, ProductBrief, ProductCreate, ProductUpdate
from .transaction import Transaction, TransactionCreate, StockMovementRequest, OrderStatusUpdate
from .audit import Audit, AuditCreate, AuditUpdate, AuditReport, ScheduleAuditRequest
from .notification import NotificationSendRequest
