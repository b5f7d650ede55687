"""Keeps invoices in line with user-asserted status and student fee edits."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from courtdesk.app.core.time import utc_now
from courtdesk.app.models.invoice import INVOICE_STATUSES, Invoice
from courtdesk.app.services.invoices import get_owned_invoice

logger = logging.getLogger(__name__)

SYNCED = "synced"
SYNC_FAILED = "failed"
SYNC_SKIPPED = "skipped"


@dataclass
class FeeSyncResult:
    status: str
    updated_count: int = 0
    error: Optional[str] = None

    @property
    def message(self) -> str:
        if self.status == SYNCED:
            return f"{self.updated_count} pending invoice(s) updated to the new fee."
        if self.status == SYNC_FAILED:
            return "Student updated, but pending invoices could not be synced: " + (self.error or "unknown error")
        return "Pending invoices unchanged."


def fee_change_requires_sync(old_amount, new_amount) -> bool:
    """Only a changed, positive fee is pushed to pending invoices."""
    if new_amount is None:
        return False
    new_value = Decimal(str(new_amount))
    if new_value <= 0:
        return False
    if old_amount is None:
        return True
    return Decimal(str(old_amount)) != new_value


def pending_invoices_to_resync(invoices: Iterable[Invoice], new_amount) -> List[Invoice]:
    new_value = Decimal(str(new_amount))
    return [
        invoice
        for invoice in invoices
        if invoice.status == "pending" and Decimal(str(invoice.amount)) != new_value
    ]


def sync_pending_invoice_amounts(db: Session, owner_id: int, student_id: int, new_amount) -> FeeSyncResult:
    """Overwrite the amount of every pending invoice of a student.

    Paid and overdue invoices are left untouched. A store failure is rolled
    back and reported, never raised.
    """
    try:
        updated = (
            db.query(Invoice)
            .filter(
                Invoice.owner_id == owner_id,
                Invoice.student_id == student_id,
                Invoice.status == "pending",
            )
            .update(
                {Invoice.amount: Decimal(str(new_amount)), Invoice.updated_at: utc_now()},
                synchronize_session=False,
            )
        )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Fee sync failed for student %s: %s", student_id, exc)
        return FeeSyncResult(status=SYNC_FAILED, error=str(getattr(exc, "orig", None) or exc))
    return FeeSyncResult(status=SYNCED, updated_count=updated)


def update_invoice_status(db: Session, owner_id: int, invoice_id: int, status: str) -> Invoice | None:
    if status not in INVOICE_STATUSES:
        raise ValueError(f"Unknown invoice status: {status}")
    invoice = get_owned_invoice(db, owner_id, invoice_id)
    if invoice is None:
        return None
    invoice.status = status
    db.commit()
    db.refresh(invoice)
    return invoice


def delete_invoice(db: Session, owner_id: int, invoice_id: int) -> bool:
    invoice = get_owned_invoice(db, owner_id, invoice_id)
    if invoice is None:
        return False
    db.delete(invoice)
    db.commit()
    return True


def delete_month_invoices(db: Session, owner_id: int, reference: str) -> int:
    """Remove every invoice of the owner for one month. Irreversible."""
    deleted = (
        db.query(Invoice)
        .filter(Invoice.owner_id == owner_id, Invoice.month_reference == reference)
        .delete(synchronize_session=False)
    )
    db.commit()
    logger.info("Deleted %s invoices for owner %s %s", deleted, owner_id, reference)
    return deleted
