"""Monthly invoice generation.

Planning is a pure function over a snapshot of active students and the ids of
students already invoiced for the month. ``generate_monthly_invoices`` wraps it
with the store round trips and always returns a ``GenerationOutcome`` instead of
raising, so callers have to look at the status to tell a created batch from an
informational no-op or a failure.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Set

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from courtdesk.app.core.settings import get_settings
from courtdesk.app.core.time import invoice_due_date, month_reference
from courtdesk.app.models.invoice import Invoice
from courtdesk.app.models.student import Student
from courtdesk.app.services.invoices import list_month_invoices

logger = logging.getLogger(__name__)

CREATED = "created"
NO_ACTIVE_STUDENTS = "no_active_students"
NO_FEES_CONFIGURED = "no_fees_configured"
ALREADY_INVOICED = "already_invoiced"
STUDENTS_UNAVAILABLE = "students_unavailable"
INSERT_FAILED = "insert_failed"

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


@dataclass(frozen=True)
class PlannedInvoice:
    student_id: int
    student_name: str
    amount: Decimal
    due_date: date
    month_reference: str
    status: str = "pending"


@dataclass
class InvoicePlan:
    month_reference: str
    fee_bearing_count: int
    to_create: List[PlannedInvoice] = field(default_factory=list)


@dataclass
class GenerationOutcome:
    status: str
    month_reference: str
    message: str
    created_count: int = 0
    existing_count: int = 0
    invoices: List[Invoice] = field(default_factory=list)

    @property
    def total_count(self) -> int:
        return self.existing_count + self.created_count

    @property
    def failed(self) -> bool:
        return self.status in (STUDENTS_UNAVAILABLE, INSERT_FAILED)


def period_label(year: int, month: int) -> str:
    return f"{MONTH_NAMES[month - 1]}/{year}"


def has_billable_fee(student) -> bool:
    fee = student.monthly_fee_amount
    return fee is not None and Decimal(str(fee)) > 0


def plan_monthly_invoices(
    students: Iterable,
    covered_student_ids: Set[int],
    year: int,
    month: int,
    due_day: int = 10,
) -> InvoicePlan:
    """Decide which students get a new invoice for (year, month).

    Only students with a positive fee that are not already covered are
    planned. Callers pass active students only.
    """
    reference = month_reference(year, month)
    due_date = invoice_due_date(year, month, due_day)
    fee_bearing = [student for student in students if has_billable_fee(student)]
    to_create = [
        PlannedInvoice(
            student_id=student.id,
            student_name=student.name,
            amount=Decimal(str(student.monthly_fee_amount)),
            due_date=due_date,
            month_reference=reference,
        )
        for student in fee_bearing
        if student.id not in covered_student_ids
    ]
    return InvoicePlan(month_reference=reference, fee_bearing_count=len(fee_bearing), to_create=to_create)


def _load_active_students(db: Session, owner_id: int) -> List[Student]:
    return (
        db.query(Student)
        .filter(Student.owner_id == owner_id, Student.status == "active")
        .order_by(Student.name.asc())
        .all()
    )


def _load_invoiced_student_ids(db: Session, owner_id: int, reference: str) -> List[int]:
    rows = (
        db.query(Invoice.student_id)
        .filter(Invoice.owner_id == owner_id, Invoice.month_reference == reference)
        .all()
    )
    return [row[0] for row in rows]


def _store_message(exc: SQLAlchemyError) -> str:
    original = getattr(exc, "orig", None)
    return str(original) if original is not None else str(exc)


def generate_monthly_invoices(db: Session, owner_id: int, year: int, month: int) -> GenerationOutcome:
    settings = get_settings()
    reference = month_reference(year, month)
    period = period_label(year, month)

    try:
        students = _load_active_students(db, owner_id)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Could not load students for owner %s", owner_id)
        return GenerationOutcome(status=STUDENTS_UNAVAILABLE, month_reference=reference, message="Could not load students")

    if not students:
        return GenerationOutcome(
            status=NO_ACTIVE_STUDENTS,
            month_reference=reference,
            message="There are no active students to invoice.",
        )

    try:
        invoiced_ids = _load_invoiced_student_ids(db, owner_id, reference)
    except SQLAlchemyError:
        # Proceed as if the month were empty; the unique constraint on
        # (student_id, month_reference, owner_id) rejects any duplicate.
        db.rollback()
        logger.warning("Could not check existing invoices for %s, assuming none", reference, exc_info=True)
        invoiced_ids = []
    existing_count = len(invoiced_ids)

    plan = plan_monthly_invoices(students, set(invoiced_ids), year, month, settings.invoice_due_day)
    if not plan.to_create:
        if plan.fee_bearing_count == 0:
            status = NO_FEES_CONFIGURED
            message = "No students have a monthly fee configured."
        else:
            status = ALREADY_INVOICED
            message = f"All students already have invoices for {period}."
        logger.info("Invoice generation for owner %s %s: %s", owner_id, reference, status)
        return GenerationOutcome(status=status, month_reference=reference, message=message, existing_count=existing_count)

    rows = [
        Invoice(
            owner_id=owner_id,
            student_id=planned.student_id,
            student_name=planned.student_name,
            amount=planned.amount,
            due_date=planned.due_date,
            status=planned.status,
            month_reference=planned.month_reference,
        )
        for planned in plan.to_create
    ]
    try:
        db.add_all(rows)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Invoice batch insert failed for owner %s %s", owner_id, reference)
        return GenerationOutcome(
            status=INSERT_FAILED,
            month_reference=reference,
            message=f"Could not generate invoices: {_store_message(exc)}",
            existing_count=existing_count,
        )

    created_count = len(rows)
    if existing_count:
        message = (
            f"{created_count} new invoice(s) added. "
            f"Total: {existing_count + created_count} invoices for {period}."
        )
    else:
        message = f"{created_count} invoices were generated for {period}."

    try:
        invoices = list_month_invoices(db, owner_id, reference)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Could not reload invoices for %s after generation", reference)
        invoices = []

    logger.info("Generated %s invoices for owner %s %s", created_count, owner_id, reference)
    return GenerationOutcome(
        status=CREATED,
        month_reference=reference,
        message=message,
        created_count=created_count,
        existing_count=existing_count,
        invoices=invoices,
    )
