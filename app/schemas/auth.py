# File: app/schemas/auth.py
from typing import Optional
from pydantic import EmailStr
from app.schemas.base import CamelModel


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class UserRegistrationRequest(CamelModel):
    full_name: str
    email: EmailStr
    password: str
    role: Optional[str] = None
