# File: app/services/audit_engine.py
"""
Audit engine.

Scans products for records whose stored fields contradict each other and
persists the findings as an Audit. Audit lifecycle is one-way:

    scheduled -> in-progress -> completed
    (in-progress can be created directly, scheduled can be completed directly)
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional
from sqlalchemy.orm import Session
from app import crud
from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.models.audit import Audit, AuditStatus, Severity
from app.models.base import utcnow
from app.models.product import Product, ProductStatus
from app.models.user import User
from app.schemas.audit import AuditCreate, AuditUpdate

logger = logging.getLogger(__name__)


@dataclass
class AuditScan:
    findings: List[Dict[str, Any]] = field(default_factory=list)
    discrepancy_count: int = 0
    breakdown: Dict[str, int] = field(
        default_factory=lambda: {s.value: 0 for s in Severity}
    )

    def summary(self) -> str:
        if not self.discrepancy_count:
            return "Audit completed. No discrepancies found."
        lines = [
            f"Product {entry['productName']} ({entry['sku']}): {d['message']}"
            for entry in self.findings
            for d in entry["discrepancies"]
        ]
        return (
            f"Audit completed. Found {self.discrepancy_count} discrepancy(ies):\n"
            + "\n".join(lines)
        )


def evaluate_product(product: Product) -> List[Dict[str, str]]:
    """Run the independent per-product checks; a product may trip several"""
    discrepancies = []
    stock = product.stock
    status = product.status

    if stock < 0:
        discrepancies.append({
            "type": "negative_stock",
            "message": f"Negative stock: {stock}",
            "severity": Severity.HIGH.value,
        })

    if stock == 0 and status != ProductStatus.OUT_OF_STOCK.value:
        discrepancies.append({
            "type": "status_mismatch",
            "message": f"Stock is 0 but status is {status}",
            "severity": Severity.MEDIUM.value,
        })

    if 0 < stock <= product.low_stock_threshold and status not in (
        ProductStatus.LOW_STOCK.value,
        ProductStatus.OUT_OF_STOCK.value,
    ):
        discrepancies.append({
            "type": "low_stock_mismatch",
            "message": (
                f"Stock ({stock}) is below threshold ({product.low_stock_threshold}) "
                f"but status is {status}"
            ),
            "severity": Severity.LOW.value,
        })

    if not product.price or product.price <= 0:
        discrepancies.append({
            "type": "invalid_price",
            "message": f"Invalid or missing price: {product.price}",
            "severity": Severity.MEDIUM.value,
        })

    return discrepancies


def run_audit(products: Iterable[Product]) -> AuditScan:
    scan = AuditScan()
    for product in products:
        discrepancies = evaluate_product(product)
        if not discrepancies:
            continue
        scan.findings.append({
            "productId": product.id,
            "productName": product.name,
            "sku": product.sku,
            "currentStock": product.stock,
            "status": product.status,
            "discrepancies": discrepancies,
        })
        scan.discrepancy_count += len(discrepancies)
        for d in discrepancies:
            scan.breakdown[d["severity"]] += 1
    return scan


def scan_inventory(db: Session) -> AuditScan:
    return run_audit(crud.product.get_all(db))


def get_audit(db: Session, audit_id: int) -> Audit:
    audit = crud.audit.get(db, id=audit_id)
    if not audit:
        raise NotFoundError("Audit not found")
    return audit


def create_new_audit(db: Session, *, created_by: User) -> tuple:
    """Scan now and store the findings as an in-progress audit"""
    scan = scan_inventory(db)
    now = utcnow()
    audit = crud.audit.create(
        db,
        obj_in=AuditCreate(
            title=f"Inventory Audit - {now:%m/%d/%Y}",
            date=now,
            status=AuditStatus.IN_PROGRESS.value,
            discrepancies=scan.discrepancy_count,
            discrepancy_details=scan.findings,
            created_by_id=created_by.id,
            notes="Audit started by auditor",
        ),
    )
    logger.info(f"Audit {audit.id} started by user {created_by.id}: {scan.discrepancy_count} discrepancies")
    return audit, scan


def schedule_audit(
    db: Session,
    *,
    title: Optional[str],
    date: Optional[datetime],
    created_by: User,
    notes: Optional[str] = None
) -> Audit:
    """Book a future audit. Scheduling does not scan; findings stay empty."""
    if not title or not title.strip() or not date:
        raise ValidationError("Audit title and date are required")

    audit = crud.audit.create(
        db,
        obj_in=AuditCreate(
            title=title.strip(),
            date=date,
            status=AuditStatus.SCHEDULED.value,
            created_by_id=created_by.id,
            notes=notes or "Audit scheduled by auditor.",
        ),
    )
    logger.info(f"Audit {audit.id} scheduled for {date:%Y-%m-%d} by user {created_by.id}")
    return audit


def start_audit(db: Session, audit_id: int) -> tuple:
    """Move a scheduled audit to in-progress, running the scan at this moment"""
    audit = get_audit(db, audit_id)
    if audit.status != AuditStatus.SCHEDULED.value:
        raise ConflictError(f"Only scheduled audits can be started (audit is {audit.status})")

    scan = scan_inventory(db)
    audit = crud.audit.update(
        db,
        db_obj=audit,
        obj_in=AuditUpdate(
            status=AuditStatus.IN_PROGRESS.value,
            discrepancies=scan.discrepancy_count,
            discrepancy_details=scan.findings,
        ),
    )
    logger.info(f"Audit {audit.id} started: {scan.discrepancy_count} discrepancies")
    return audit, scan


def complete_audit(db: Session, audit_id: int) -> Audit:
    """Close an audit. Findings are kept as they are, nothing is recomputed."""
    audit = get_audit(db, audit_id)
    if audit.status == AuditStatus.COMPLETED.value:
        raise ConflictError("Audit is already completed")

    audit = crud.audit.update(db, db_obj=audit, obj_in=AuditUpdate(status=AuditStatus.COMPLETED.value))
    logger.info(f"Audit {audit.id} completed")
    return audit


def auditor_dashboard_stats(db: Session) -> dict:
    scan = scan_inventory(db)
    return {
        "totalAudits": crud.audit.count(db),
        "completedAudits": crud.audit.count_by_status(db, status=AuditStatus.COMPLETED.value),
        "inProgressAudits": crud.audit.count_by_status(db, status=AuditStatus.IN_PROGRESS.value),
        "scheduledAudits": crud.audit.count_by_status(db, status=AuditStatus.SCHEDULED.value),
        "totalDiscrepancies": scan.discrepancy_count,
        "totalProducts": crud.product.count(db),
    }
