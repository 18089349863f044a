# File: app/services/audit_export.py
"""CSV and PDF renderings of audit findings for download."""
import csv
import io
from datetime import datetime
from typing import List, Optional
from xml.sax.saxutils import escape
from sqlalchemy.orm import Session
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from app import crud
from app.core.exceptions import ValidationError
from app.models.base import utcnow
from app.services.audit_engine import evaluate_product, get_audit

EXPORT_FORMATS = ("csv", "pdf")
HEADER = ["Product Name", "SKU", "Current Stock", "Status", "Discrepancies"]


class AuditExport:
    def __init__(self, title: str, generated_at: datetime, rows: List[List[str]]):
        self.title = title
        self.generated_at = generated_at
        self.rows = rows

    def filename(self, extension: str) -> str:
        return f"audit-report-{self.generated_at:%Y-%m-%d}.{extension}"


def build_export(db: Session, report_id: Optional[int] = None) -> AuditExport:
    """Rows from a stored audit's findings, or from a live scan of every product"""
    if report_id is not None:
        audit = get_audit(db, report_id)
        rows = [
            [
                entry["productName"],
                entry["sku"],
                str(entry["currentStock"]),
                entry["status"],
                "; ".join(d["message"] for d in entry["discrepancies"]) or "None",
            ]
            for entry in audit.discrepancy_details
        ]
        return AuditExport(audit.title, utcnow(), rows)

    rows = []
    for product in crud.product.get_all(db):
        discrepancies = evaluate_product(product)
        rows.append([
            product.name,
            product.sku,
            str(product.stock),
            product.status,
            "; ".join(d["message"] for d in discrepancies) if discrepancies else "None",
        ])
    return AuditExport("Inventory Audit Report", utcnow(), rows)


def render_csv(export: AuditExport) -> bytes:
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_ALL)
    writer.writerow(HEADER)
    writer.writerows(export.rows)
    return output.getvalue().encode("utf-8")


def render_pdf(export: AuditExport) -> bytes:
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=landscape(A4),
        leftMargin=0.6 * inch,
        rightMargin=0.6 * inch,
        topMargin=0.6 * inch,
        bottomMargin=0.6 * inch,
        title=export.title,
    )
    styles = getSampleStyleSheet()
    cell_style = styles["BodyText"]

    content = [
        Paragraph(escape(export.title), styles["Title"]),
        Paragraph(f"Generated {export.generated_at:%Y-%m-%d %H:%M} UTC", styles["Normal"]),
        Spacer(1, 0.25 * inch),
    ]

    # Wrap long discrepancy text instead of overflowing the column
    data = [HEADER] + [row[:4] + [Paragraph(escape(row[4]), cell_style)] for row in export.rows]
    table = Table(data, repeatRows=1, colWidths=[2.2 * inch, 1.3 * inch, 1.0 * inch, 1.1 * inch, 3.8 * inch])
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#1f2937")),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#f3f4f6")]),
    ]))
    content.append(table)
    if not export.rows:
        content.append(Paragraph("No products to report.", styles["Normal"]))

    doc.build(content)
    return buffer.getvalue()


def export_report(db: Session, *, format: str, report_id: Optional[int] = None) -> tuple:
    """Return (payload bytes, media type, filename)"""
    if format not in EXPORT_FORMATS:
        raise ValidationError('Invalid format. Use "csv" or "pdf"')

    export = build_export(db, report_id)
    if format == "csv":
        return render_csv(export), "text/csv", export.filename("csv")
    return render_pdf(export), "application/pdf", export.filename("pdf")
