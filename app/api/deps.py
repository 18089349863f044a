# File: app/api/deps.py
from typing import Callable
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from app import crud
from app.core.exceptions import AuthenticationError, PermissionDeniedError
from app.core.security import decode_token
from app.db.database import get_db
from app.models.user import User, UserRole

security = HTTPBearer(auto_error=False)


def get_current_user(
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> User:
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    payload = decode_token(credentials.credentials)
    if payload is None or payload.get("sub") is None:
        raise AuthenticationError("Could not validate credentials")

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise AuthenticationError("Could not validate credentials")

    user = crud.user.get(db, id=user_id)
    if user is None or not crud.user.is_active(user):
        raise AuthenticationError("Could not validate credentials")
    return user


def require_roles(*roles: UserRole) -> Callable[..., User]:
    """Dependency that lets only the listed roles through"""
    allowed = {role.value for role in roles}

    def checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed:
            raise PermissionDeniedError(
                f"Role '{current_user.role}' is not authorized to access this resource"
            )
        return current_user

    return checker
