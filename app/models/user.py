# File: app/models/user.py
from sqlalchemy import Column, String, Boolean
from app.models.base import BaseModel
import enum


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    CLERK = "clerk"
    AUDITOR = "auditor"


# Self-service signup is limited to these roles; admins are bootstrapped
SIGNUP_ROLES = (UserRole.MANAGER, UserRole.CLERK, UserRole.AUDITOR)


class User(BaseModel):
    __tablename__ = "users"

    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=UserRole.CLERK.value, index=True)
    is_active = Column(Boolean, default=True)
