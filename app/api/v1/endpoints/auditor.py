# File: app/api/v1/endpoints/auditor.py
import io
from typing import Any, Optional
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session
from app import crud, schemas
from app.api import deps
from app.core.config import settings
from app.db.database import get_db
from app.models.user import User, UserRole
from app.services import audit_engine
from app.services.audit_export import export_report

router = APIRouter()

auditor_only = deps.require_roles(UserRole.AUDITOR)


def _scan_payload(audit, scan: audit_engine.AuditScan) -> dict:
    return {
        "auditId": audit.id,
        "status": audit.status,
        "totalDiscrepancies": scan.discrepancy_count,
        "discrepancyBreakdown": scan.breakdown,
        "auditResults": scan.findings,
        "summary": scan.summary(),
    }


@router.get("/stats")
def get_dashboard_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(auditor_only),
) -> Any:
    return {"success": True, "data": audit_engine.auditor_dashboard_stats(db)}


@router.post("/auditInventory")
def create_new_audit(
    db: Session = Depends(get_db),
    current_user: User = Depends(auditor_only),
) -> Any:
    """Scan every product now and record the findings as an in-progress audit"""
    audit, scan = audit_engine.create_new_audit(db, created_by=current_user)
    return {
        "success": True,
        "message": f"New audit started successfully, {scan.discrepancy_count} discrepancies found.",
        "data": _scan_payload(audit, scan),
    }


@router.post("/scheduleAudit", status_code=status.HTTP_201_CREATED)
def schedule_audit(
    audit_in: schemas.ScheduleAuditRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(auditor_only),
) -> Any:
    audit = audit_engine.schedule_audit(
        db,
        title=audit_in.title,
        date=audit_in.date,
        notes=audit_in.notes,
        created_by=current_user,
    )
    return {
        "success": True,
        "message": f"Audit scheduled for {audit.date:%Y-%m-%d} successfully.",
        "data": {
            "auditId": audit.id,
            "title": audit.title,
            "date": audit.date,
            "status": audit.status,
        },
    }


@router.get("/reports")
def get_audit_reports(
    db: Session = Depends(get_db),
    current_user: User = Depends(auditor_only),
) -> Any:
    audits = crud.audit.get_reports(db, limit=settings.AUDIT_REPORTS_LIMIT)
    return {
        "success": True,
        "count": len(audits),
        "data": [schemas.serialize(schemas.AuditReport, a) for a in audits],
    }


@router.get("/audits/{audit_id}")
def get_audit(
    audit_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(auditor_only),
) -> Any:
    audit = audit_engine.get_audit(db, audit_id)
    return {"success": True, "data": schemas.serialize(schemas.Audit, audit)}


@router.put("/audits/{audit_id}/start")
def start_audit(
    audit_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(auditor_only),
) -> Any:
    audit, scan = audit_engine.start_audit(db, audit_id)
    return {
        "success": True,
        "message": "Audit started successfully",
        "data": _scan_payload(audit, scan),
    }


@router.put("/audits/{audit_id}/complete")
def complete_audit(
    audit_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(auditor_only),
) -> Any:
    audit = audit_engine.complete_audit(db, audit_id)
    return {
        "success": True,
        "message": "Audit marked as completed successfully",
        "data": schemas.serialize(schemas.Audit, audit),
    }


@router.get("/exportReport")
def export_audit_report(
    db: Session = Depends(get_db),
    current_user: User = Depends(auditor_only),
    format: str = Query("csv", description="csv or pdf"),
    report_id: Optional[int] = Query(None, alias="reportId"),
) -> Any:
    """Download audit findings as a CSV or PDF attachment"""
    payload, media_type, filename = export_report(db, format=format, report_id=report_id)
    return StreamingResponse(
        io.BytesIO(payload),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
