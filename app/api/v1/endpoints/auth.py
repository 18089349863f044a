# File: app/api/v1/endpoints/auth.py
import logging
from typing import Any
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app import crud, schemas
from app.api import deps
from app.core import security
from app.core.exceptions import AuthenticationError, ValidationError
from app.db.database import get_db
from app.models.user import SIGNUP_ROLES, User

logger = logging.getLogger(__name__)
router = APIRouter()


def _auth_payload(user: User) -> dict:
    return {
        "user": schemas.serialize(schemas.User, user),
        "token": security.create_access_token(user.id, role=user.role),
    }


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    user_in: schemas.UserRegistrationRequest,
    db: Session = Depends(get_db),
) -> Any:
    """Self sign-up; admin accounts are never created here"""
    allowed = [role.value for role in SIGNUP_ROLES]
    if user_in.role not in allowed:
        raise ValidationError("Invalid role. Only Manager, Clerk, and Auditor can sign up.")

    if crud.user.get_by_email(db, email=user_in.email):
        raise ValidationError("User with this email already exists")

    user = crud.user.create(db, obj_in=user_in)
    logger.info(f"Registered {user.role} account {user.email}")
    return {
        "success": True,
        "data": _auth_payload(user),
        "message": "Account created successfully",
    }


@router.post("/login")
def login(
    credentials: schemas.LoginRequest,
    db: Session = Depends(get_db),
) -> Any:
    user = crud.user.authenticate(db, email=credentials.email, password=credentials.password)
    if not user or not crud.user.is_active(user):
        raise AuthenticationError("Invalid email or password")

    return {
        "success": True,
        "data": _auth_payload(user),
        "message": "Login successful",
    }


@router.get("/me")
def read_current_user(current_user: User = Depends(deps.get_current_user)) -> Any:
    return {"success": True, "data": schemas.serialize(schemas.User, current_user)}
