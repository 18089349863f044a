# File: app/api/v1/endpoints/admin.py
import logging
from typing import Any
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app import crud, schemas
from app.api import deps
from app.core.exceptions import NotFoundError, ValidationError
from app.db.database import get_db
from app.models.user import User, UserRole
from app.services import report_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/dashboard")
def get_dashboard_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_roles(UserRole.ADMIN)),
) -> Any:
    return {"success": True, "data": report_service.admin_dashboard_stats(db)}


@router.put("/users/{user_id}/role")
def update_user_role(
    user_id: int,
    role_in: schemas.UserRoleChange,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_roles(UserRole.ADMIN)),
) -> Any:
    valid_roles = [role.value for role in UserRole]
    if role_in.role not in valid_roles:
        raise ValidationError(f"Invalid role. Must be one of: {', '.join(valid_roles)}")

    if user_id == current_user.id:
        raise ValidationError("You cannot change your own role")

    user = crud.user.get(db, id=user_id)
    if not user:
        raise NotFoundError("User not found")

    user = crud.user.update(db, db_obj=user, obj_in={"role": role_in.role})
    logger.info(f"Admin {current_user.id} changed role of user {user.id} to {user.role}")
    return {
        "success": True,
        "data": schemas.serialize(schemas.UserBrief, user),
        "message": "User role updated successfully",
    }
