from datetime import datetime, timezone

import pytest

from app.core.exceptions import ConflictError, ValidationError
from app.models.audit import Audit
from app.models.product import Product
from app.services import audit_engine


def force_stock(db, product, stock):
    """Bulk write that skips status derivation, like a raw database edit"""
    db.query(Product).filter(Product.id == product.id).update({"stock": stock}, synchronize_session=False)
    db.commit()
    db.expire_all()


def test_consistent_catalogue_has_no_findings(db, make_product):
    make_product(stock=50)
    make_product(stock=5)
    make_product(stock=0)

    scan = audit_engine.scan_inventory(db)

    assert scan.discrepancy_count == 0
    assert scan.findings == []
    assert scan.summary() == "Audit completed. No discrepancies found."


def test_zero_stock_with_in_stock_status(db, make_product):
    product = make_product(stock=50)
    force_stock(db, product, 0)

    scan = audit_engine.scan_inventory(db)

    assert scan.discrepancy_count == 1
    [finding] = scan.findings
    assert finding["productId"] == product.id
    assert [d["type"] for d in finding["discrepancies"]] == ["status_mismatch"]
    assert finding["discrepancies"][0]["severity"] == "medium"


def test_negative_stock_is_high_severity(db, make_product):
    product = make_product(stock=5)
    force_stock(db, product, -1)

    scan = audit_engine.scan_inventory(db)

    [finding] = scan.findings
    assert [d["type"] for d in finding["discrepancies"]] == ["negative_stock"]
    assert scan.breakdown == {"high": 1, "medium": 0, "low": 0}


def test_threshold_mismatch_and_invalid_price_on_one_product(db, make_product):
    product = make_product(stock=50, price=0)
    force_stock(db, product, 3)

    scan = audit_engine.scan_inventory(db)

    [finding] = scan.findings
    assert {d["type"] for d in finding["discrepancies"]} == {"low_stock_mismatch", "invalid_price"}
    assert scan.discrepancy_count == 2
    assert scan.breakdown == {"high": 0, "medium": 1, "low": 1}
    assert "Found 2 discrepancy(ies)" in scan.summary()


def test_create_new_audit_stores_findings(db, users, make_product):
    product = make_product(stock=50)
    force_stock(db, product, 0)

    audit, scan = audit_engine.create_new_audit(db, created_by=users["auditor"])

    assert audit.status == "in-progress"
    assert audit.discrepancies == 1
    assert audit.discrepancy_details == scan.findings
    assert audit.title.startswith("Inventory Audit - ")


def test_schedule_does_not_scan(db, users, make_product):
    product = make_product(stock=50)
    force_stock(db, product, 0)

    audit = audit_engine.schedule_audit(
        db,
        title="Quarterly count",
        date=datetime(2026, 12, 1, tzinfo=timezone.utc),
        created_by=users["auditor"],
    )

    assert audit.status == "scheduled"
    assert audit.discrepancies == 0
    assert audit.discrepancy_details == []


@pytest.mark.parametrize("title, date", [(None, datetime(2026, 12, 1)), ("  ", datetime(2026, 12, 1)), ("Count", None)])
def test_schedule_requires_title_and_date(db, users, title, date):
    with pytest.raises(ValidationError):
        audit_engine.schedule_audit(db, title=title, date=date, created_by=users["auditor"])


def test_lifecycle_scheduled_to_completed(db, users, make_product):
    product = make_product(stock=50)
    audit = audit_engine.schedule_audit(
        db, title="Cycle count", date=datetime(2026, 12, 1), created_by=users["auditor"]
    )
    force_stock(db, product, 0)

    audit, scan = audit_engine.start_audit(db, audit.id)
    assert audit.status == "in-progress"
    assert audit.discrepancies == 1

    with pytest.raises(ConflictError):
        audit_engine.start_audit(db, audit.id)

    # fixing the product afterwards does not rewrite the stored findings
    force_stock(db, product, 50)
    audit = audit_engine.complete_audit(db, audit.id)
    assert audit.status == "completed"
    assert audit.discrepancies == 1


def test_complete_twice_is_a_conflict(db, users):
    audit, _ = audit_engine.create_new_audit(db, created_by=users["auditor"])
    audit_engine.complete_audit(db, audit.id)
    updated_at = db.get(Audit, audit.id).updated_at

    with pytest.raises(ConflictError):
        audit_engine.complete_audit(db, audit.id)

    db.expire_all()
    stored = db.get(Audit, audit.id)
    assert stored.status == "completed"
    assert stored.updated_at == updated_at


def test_scheduled_audit_can_be_completed_directly(db, users):
    audit = audit_engine.schedule_audit(
        db, title="Spot check", date=datetime(2026, 12, 1), created_by=users["auditor"]
    )
    assert audit_engine.complete_audit(db, audit.id).status == "completed"
