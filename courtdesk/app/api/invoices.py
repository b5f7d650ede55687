"""Invoice routes: monthly generation, reconciliation and collection links."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from courtdesk.app.core.settings import get_settings
from courtdesk.app.core.time import MONTH_REFERENCE_PATTERN, current_month_reference
from courtdesk.app.db.session import get_db
from courtdesk.app.dependencies.auth import get_current_user
from courtdesk.app.models.invoice import Invoice
from courtdesk.app.models.user import User
from courtdesk.app.schemas.invoice import (
    InvoiceGenerateRequest,
    InvoiceGenerationRead,
    InvoiceMonthDeleteResult,
    InvoiceMonthSummary,
    InvoiceRead,
    InvoiceStatusUpdate,
    WhatsAppLinkRead,
)
from courtdesk.app.services.invoice_generation import (
    CREATED,
    INSERT_FAILED,
    STUDENTS_UNAVAILABLE,
    generate_monthly_invoices,
)
from courtdesk.app.services.invoice_reconciliation import delete_invoice, delete_month_invoices, update_invoice_status
from courtdesk.app.services.invoices import get_owned_invoice, list_month_invoices, summarize_invoices
from courtdesk.app.services.notifications import build_whatsapp_link, compose_collection_message, normalize_phone

router = APIRouter(prefix="/invoices", tags=["invoices"])

MonthQuery = Query(default=None, pattern=MONTH_REFERENCE_PATTERN, description="Billing month as YYYY-MM")


def _get_owned_invoice(db: Session, invoice_id: int, owner_id: int) -> Invoice:
    invoice = get_owned_invoice(db, owner_id, invoice_id)
    if not invoice:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invoice not found")
    return invoice


@router.get("/", response_model=List[InvoiceRead])
async def list_invoices(
    month: Optional[str] = MonthQuery,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return list_month_invoices(db, current_user.id, month or current_month_reference())


@router.get("/summary", response_model=InvoiceMonthSummary)
async def get_month_summary(
    month: Optional[str] = MonthQuery,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    reference = month or current_month_reference()
    return summarize_invoices(list_month_invoices(db, current_user.id, reference), reference)


@router.post("/generate", response_model=InvoiceGenerationRead)
async def generate_invoices(
    payload: InvoiceGenerateRequest,
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    outcome = generate_monthly_invoices(db, current_user.id, payload.year, payload.month)
    if outcome.status == STUDENTS_UNAVAILABLE:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=outcome.message)
    if outcome.status == INSERT_FAILED:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=outcome.message)
    response.status_code = status.HTTP_201_CREATED if outcome.status == CREATED else status.HTTP_200_OK
    return InvoiceGenerationRead(
        status=outcome.status,
        month_reference=outcome.month_reference,
        created_count=outcome.created_count,
        existing_count=outcome.existing_count,
        total_count=outcome.total_count,
        message=outcome.message,
        invoices=[InvoiceRead.model_validate(invoice) for invoice in outcome.invoices],
    )


@router.delete("/", response_model=InvoiceMonthDeleteResult)
async def delete_invoices_for_month(
    month: str = Query(..., pattern=MONTH_REFERENCE_PATTERN),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    deleted = delete_month_invoices(db, current_user.id, month)
    return InvoiceMonthDeleteResult(month_reference=month, deleted=deleted)


@router.get("/{invoice_id}", response_model=InvoiceRead)
async def get_invoice(invoice_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _get_owned_invoice(db, invoice_id, current_user.id)


@router.patch("/{invoice_id}/status", response_model=InvoiceRead)
async def set_invoice_status(
    invoice_id: int,
    payload: InvoiceStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    invoice = update_invoice_status(db, current_user.id, invoice_id, payload.status)
    if invoice is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invoice not found")
    return invoice


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_invoice(invoice_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    if not delete_invoice(db, current_user.id, invoice_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invoice not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{invoice_id}/whatsapp-link", response_model=WhatsAppLinkRead)
async def get_whatsapp_link(invoice_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    settings = get_settings()
    invoice = _get_owned_invoice(db, invoice_id, current_user.id)
    phone = normalize_phone(invoice.student.phone if invoice.student else None, settings.whatsapp_country_code)
    if phone is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Student has no phone number")
    message = compose_collection_message(invoice.student_name, invoice.amount, invoice.due_date, settings.currency_symbol)
    return WhatsAppLinkRead(phone=phone, message=message, url=build_whatsapp_link(phone, message))
