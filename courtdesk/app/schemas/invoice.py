"""Invoice schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

InvoiceStatus = Literal["pending", "paid", "overdue"]
GenerationStatus = Literal[
    "created",
    "no_active_students",
    "no_fees_configured",
    "already_invoiced",
    "students_unavailable",
    "insert_failed",
]


class InvoiceRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    student_id: int
    student_name: str

    amount: Decimal
    due_date: date
    status: InvoiceStatus
    month_reference: str

    created_at: datetime
    updated_at: datetime


class InvoiceStatusUpdate(BaseModel):
    status: InvoiceStatus


class InvoiceGenerateRequest(BaseModel):
    year: int = Field(ge=2000, le=9999)
    month: int = Field(ge=1, le=12)


class InvoiceGenerationRead(BaseModel):
    status: GenerationStatus
    month_reference: str
    created_count: int
    existing_count: int
    total_count: int
    message: str
    invoices: list[InvoiceRead] = []


class InvoiceMonthSummary(BaseModel):
    month_reference: str
    invoice_count: int
    total: Decimal
    paid: Decimal
    pending: Decimal
    overdue: Decimal


class InvoiceMonthDeleteResult(BaseModel):
    month_reference: str
    deleted: int


class WhatsAppLinkRead(BaseModel):
    phone: str
    message: str
    url: str
