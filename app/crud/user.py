from typing import Any, Dict, List, Optional, Union
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.audit import Audit
from app.models.transaction import Transaction
from app.models.user import User, UserRole
from app.schemas.auth import UserRegistrationRequest
from app.schemas.user import UserUpdate
from app.core.security import get_password_hash, verify_password


class CRUDUser(CRUDBase[User, UserRegistrationRequest, UserUpdate]):

    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    def get_by_role(self, db: Session, *, role: Union[UserRole, str]) -> List[User]:
        role_value = role.value if isinstance(role, UserRole) else role
        return (
            db.query(User)
            .filter(User.role == role_value, User.is_active == True)
            .order_by(User.id)
            .all()
        )

    def get_all(self, db: Session) -> List[User]:
        return db.query(User).order_by(User.id).all()

    def create(self, db: Session, *, obj_in: Union[UserRegistrationRequest, Dict[str, Any]]) -> User:
        if isinstance(obj_in, dict):
            create_data = dict(obj_in)
        else:
            create_data = obj_in.model_dump()
        password = create_data.pop("password")
        create_data["hashed_password"] = get_password_hash(password)
        db_obj = User(**create_data)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def authenticate(self, db: Session, *, email: str, password: str) -> Optional[User]:
        user = self.get_by_email(db, email=email)
        if not user:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    def is_active(self, user: User) -> bool:
        return user.is_active

    def has_inventory_activity(self, db: Session, *, user_id: int) -> bool:
        """True when the user performed a stock movement or created an audit"""
        if db.query(Transaction.id).filter(Transaction.performed_by_id == user_id).first():
            return True
        return db.query(Audit.id).filter(Audit.created_by_id == user_id).first() is not None


user = CRUDUser(User)
