# File: app/schemas/user.py
from typing import Optional
from datetime import datetime
from app.schemas.base import CamelModel


class UserBrief(CamelModel):
    id: int
    full_name: str
    email: str
    role: str


class User(UserBrief):
    is_active: bool = True
    created_at: datetime
    updated_at: Optional[datetime] = None


class UserUpdate(CamelModel):
    full_name: Optional[str] = None
    role: Optional[str] = None


class UserRoleChange(CamelModel):
    role: Optional[str] = None
