"""
Pytest configuration and fixtures for the Inventra API tests
"""
import os

# Must be set before anything imports app.core.config
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ENVIRONMENT"] = "testing"
os.environ["LOG_LEVEL"] = "WARNING"

import itertools

import pytest
from fastapi.testclient import TestClient

from app import crud
from app.core.security import create_access_token
from app.db.database import Base, SessionLocal, engine
from app.main import app as fastapi_app
from app.models.user import UserRole
from app.schemas.product import ProductCreate

PASSWORD = "Secret123!"

_sku_counter = itertools.count(1)


@pytest.fixture(autouse=True)
def schema():
    """Fresh tables for every test"""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(fastapi_app)


def make_user(db, role: UserRole, email: str = None, full_name: str = None):
    return crud.user.create(
        db,
        obj_in={
            "email": email or f"{role.value}{next(_sku_counter)}@inventra.test",
            "password": PASSWORD,
            "full_name": full_name or f"Test {role.value.title()}",
            "role": role.value,
        },
    )


@pytest.fixture
def users(db):
    """One user per role"""
    return {role.value: make_user(db, role, email=f"{role.value}@inventra.test") for role in UserRole}


def auth_headers(user) -> dict:
    token = create_access_token(user.id, role=user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers(users):
    return {role: auth_headers(user) for role, user in users.items()}


@pytest.fixture
def make_product(db, users):
    def _make(**overrides):
        data = {
            "name": "Widget",
            "sku": f"SKU-{next(_sku_counter):04d}",
            "category": "Hardware",
            "stock": 50,
            "price": 9.99,
            "low_stock_threshold": 10,
        }
        data.update(overrides)
        return crud.product.create_with_owner(
            db, obj_in=ProductCreate(**data), added_by_id=users["admin"].id
        )

    return _make


@pytest.fixture
def user_factory(db):
    def _make(role: UserRole, **kwargs):
        return make_user(db, role, **kwargs)

    return _make
