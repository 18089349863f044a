# File: app/api/v1/endpoints/users.py
import logging
from typing import Any
from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app import crud, schemas
from app.api import deps
from app.core.exceptions import ConflictError, NotFoundError, PermissionDeniedError, ValidationError
from app.db.database import get_db
from app.models.user import User, UserRole

logger = logging.getLogger(__name__)
router = APIRouter()

ROLE_VALUES = [role.value for role in UserRole]


def _get_user_or_404(db: Session, user_id: int) -> User:
    user = crud.user.get(db, id=user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


@router.get("/")
def list_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_roles(UserRole.ADMIN)),
) -> Any:
    users = crud.user.get_all(db)
    return {
        "success": True,
        "count": len(users),
        "data": [schemas.serialize(schemas.User, u) for u in users],
    }


@router.get("/{user_id}")
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    user = _get_user_or_404(db, user_id)
    return {"success": True, "data": schemas.serialize(schemas.User, user)}


@router.put("/{user_id}")
def update_user(
    user_id: int,
    user_in: schemas.UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    """Update a profile; only admins may change a role"""
    if user_in.role and current_user.role != UserRole.ADMIN.value:
        raise PermissionDeniedError("Only admins can update user roles")
    if user_in.role and user_in.role not in ROLE_VALUES:
        raise ValidationError(f"Invalid role. Must be one of: {', '.join(ROLE_VALUES)}")

    user = _get_user_or_404(db, user_id)
    update_data = {k: v for k, v in user_in.model_dump(exclude_unset=True).items() if v}
    user = crud.user.update(db, db_obj=user, obj_in=update_data)
    return {
        "success": True,
        "data": schemas.serialize(schemas.User, user),
        "message": "User updated successfully",
    }


@router.delete("/{user_id}")
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_roles(UserRole.ADMIN)),
) -> Any:
    if user_id == current_user.id:
        raise ValidationError("You cannot delete your own account")

    _get_user_or_404(db, user_id)
    if crud.user.has_inventory_activity(db, user_id=user_id):
        raise ConflictError("User has recorded inventory activity and cannot be deleted")
    try:
        crud.user.remove(db, id=user_id)
    except IntegrityError:
        db.rollback()
        raise ConflictError("User has recorded inventory activity and cannot be deleted")

    logger.info(f"User {user_id} deleted by admin {current_user.id}")
    return {"success": True, "message": "User deleted successfully"}
