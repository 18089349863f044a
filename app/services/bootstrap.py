# File: app/services/bootstrap.py
import logging
from typing import Optional
from sqlalchemy.orm import Session
from app import crud
from app.core.config import settings
from app.models.user import User, UserRole

logger = logging.getLogger(__name__)


def ensure_admin(
    db: Session,
    *,
    email: Optional[str] = None,
    password: Optional[str] = None,
    full_name: Optional[str] = None
) -> Optional[User]:
    """Create the bootstrap admin account unless a user with that email exists.

    Without a password (argument or ADMIN_PASSWORD) nothing is seeded and
    None is returned.
    """
    email = email or settings.ADMIN_EMAIL
    existing = crud.user.get_by_email(db, email=email)
    if existing:
        logger.info(f"Admin account {email} already exists")
        return existing

    password = password or settings.ADMIN_PASSWORD
    if not password:
        logger.warning(f"ADMIN_PASSWORD is not set, admin account {email} was not created")
        return None

    admin = crud.user.create(
        db,
        obj_in={
            "email": email,
            "password": password,
            "full_name": full_name or settings.ADMIN_FULL_NAME,
            "role": UserRole.ADMIN.value,
            "is_active": True,
        },
    )
    logger.info(f"Created admin account {admin.email}")
    return admin
