"""Invoice queries and month totals."""

from decimal import Decimal
from typing import Iterable, List

from sqlalchemy.orm import Session

from courtdesk.app.models.invoice import Invoice


def get_owned_invoice(db: Session, owner_id: int, invoice_id: int) -> Invoice | None:
    return db.query(Invoice).filter(Invoice.id == invoice_id, Invoice.owner_id == owner_id).first()


def list_month_invoices(db: Session, owner_id: int, reference: str) -> List[Invoice]:
    return (
        db.query(Invoice)
        .filter(Invoice.owner_id == owner_id, Invoice.month_reference == reference)
        .order_by(Invoice.due_date.asc(), Invoice.student_name.asc(), Invoice.id.asc())
        .all()
    )


def list_student_invoices(db: Session, owner_id: int, student_id: int) -> List[Invoice]:
    return (
        db.query(Invoice)
        .filter(Invoice.owner_id == owner_id, Invoice.student_id == student_id)
        .order_by(Invoice.month_reference.desc(), Invoice.id.desc())
        .all()
    )


def summarize_invoices(invoices: Iterable[Invoice], reference: str) -> dict:
    """Totals per status for one month of invoices."""
    totals = {"pending": Decimal("0.00"), "paid": Decimal("0.00"), "overdue": Decimal("0.00")}
    count = 0
    for invoice in invoices:
        amount = Decimal(str(invoice.amount or 0))
        totals[invoice.status] = totals.get(invoice.status, Decimal("0.00")) + amount
        count += 1
    total = totals["pending"] + totals["paid"] + totals["overdue"]
    return {
        "month_reference": reference,
        "invoice_count": count,
        "total": total.quantize(Decimal("0.01")),
        "paid": totals["paid"].quantize(Decimal("0.01")),
        "pending": totals["pending"].quantize(Decimal("0.01")),
        "overdue": totals["overdue"].quantize(Decimal("0.01")),
    }
