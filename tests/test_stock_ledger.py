import itertools

import pytest
from hypothesis import HealthCheck, given, settings, strategies as st

from app import crud
from app.core.exceptions import InsufficientStockError, NotFoundError, ValidationError
from app.models.notification import Notification
from app.models.transaction import Transaction
from app.models.user import UserRole
from app.services import stock_ledger

fixture_settings = settings(
    max_examples=25,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)


@fixture_settings
@given(initial=st.integers(min_value=0, max_value=500), quantity=st.integers(min_value=1, max_value=500))
def test_stock_in_adds_quantity(db, users, make_product, initial, quantity):
    product = make_product(stock=initial)

    movement = stock_ledger.stock_in(db, product_id=product.id, quantity=quantity, performed_by=users["manager"])

    assert movement.previous_stock == initial
    assert movement.new_stock == initial + quantity
    db.refresh(product)
    assert product.stock == initial + quantity
    assert movement.transaction.previous_stock == initial
    assert movement.transaction.new_stock == initial + quantity
    assert movement.transaction.type == "in"


@fixture_settings
@given(initial=st.integers(min_value=0, max_value=500), quantity=st.integers(min_value=1, max_value=500))
def test_stock_out_never_goes_negative(db, users, make_product, initial, quantity):
    product = make_product(stock=initial)
    before = db.query(Transaction).count()

    if quantity > initial:
        with pytest.raises(InsufficientStockError) as exc:
            stock_ledger.stock_out(db, product_id=product.id, quantity=quantity, performed_by=users["manager"])
        assert exc.value.data == {"available": initial, "requested": quantity}
        db.refresh(product)
        assert product.stock == initial
        assert db.query(Transaction).count() == before
    else:
        movement = stock_ledger.stock_out(db, product_id=product.id, quantity=quantity, performed_by=users["manager"])
        db.refresh(product)
        assert product.stock == initial - quantity
        assert movement.transaction.quantity == quantity
        assert db.query(Transaction).count() == before + 1


def test_restock_example_notifies_every_clerk(db, users, user_factory, make_product):
    user_factory(UserRole.CLERK)
    clerks = crud.user.get_by_role(db, role=UserRole.CLERK)
    assert len(clerks) == 2

    product = make_product(sku="X1", stock=5, low_stock_threshold=10)
    assert product.status == "low-stock"

    movement = stock_ledger.stock_in(db, product_id=product.id, quantity=20, performed_by=users["manager"])

    db.refresh(product)
    assert product.stock == 25
    assert product.status == "in-stock"
    assert len(movement.notifications) == 2

    restocks = db.query(Notification).filter(Notification.type == "restock").all()
    assert sorted(n.recipient_id for n in restocks) == sorted(c.id for c in clerks)
    assert restocks[0].extra_data["newStock"] == 25
    assert restocks[0].related_product_id == product.id


def test_stock_out_to_zero_marks_out_of_stock(db, users, make_product):
    product = make_product(stock=4)
    stock_ledger.stock_out(db, product_id=product.id, quantity=4, performed_by=users["manager"])
    db.refresh(product)
    assert product.stock == 0
    assert product.status == "out-of-stock"


def test_default_reference(db, users, make_product):
    product = make_product()
    movement = stock_ledger.stock_out(db, product_id=product.id, quantity=1, performed_by=users["manager"])
    assert movement.transaction.reference.startswith("STOCK-OUT-")

    movement = stock_ledger.stock_in(
        db, product_id=product.id, quantity=1, performed_by=users["manager"], reference="PO-77"
    )
    assert movement.transaction.reference == "PO-77"


@pytest.mark.parametrize("product_id, quantity", [(None, 5), (1, 0), (1, -3), (1, None)])
def test_rejects_missing_or_non_positive_input(db, users, make_product, product_id, quantity):
    make_product()
    with pytest.raises(ValidationError):
        stock_ledger.stock_in(db, product_id=product_id, quantity=quantity, performed_by=users["manager"])


def test_unknown_product(db, users):
    with pytest.raises(NotFoundError):
        stock_ledger.stock_out(db, product_id=999, quantity=1, performed_by=users["manager"])
