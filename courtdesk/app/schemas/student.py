"""Student schemas for CourtDesk."""

from datetime import date, datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

StudentStatus = Literal["active", "inactive", "suspended", "trial"]
FeeType = Literal["monthly", "weekly", "per_class", "package"]
BadgeColor = Literal["red", "orange", "green", "yellow"]


class StudentDocument(BaseModel):
    name: str
    url: str
    key: Optional[str] = None
    type: Optional[str] = None
    size: int
    uploaded_at: datetime


class StudentBase(BaseModel):
    name: str = Field(min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    badge_color: Optional[BadgeColor] = None
    badge_description: Optional[str] = None
    birth_date: Optional[date] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = None
    emergency_phone: Optional[str] = None
    medical_info: Optional[str] = None
    monthly_fee_type: FeeType = "monthly"
    monthly_fee_amount: Optional[Decimal] = Field(default=None, ge=0)
    payment_day: Optional[int] = Field(default=5, ge=1, le=31)
    discount_percentage: Optional[Decimal] = Field(default=Decimal("0"), ge=0, le=100)
    notes: Optional[str] = None
    status: StudentStatus = "active"
    enrollment_date: Optional[date] = None


class StudentCreate(StudentBase):
    pass


class StudentUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    badge_color: Optional[BadgeColor] = None
    badge_description: Optional[str] = None
    birth_date: Optional[date] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = None
    emergency_phone: Optional[str] = None
    medical_info: Optional[str] = None
    monthly_fee_type: Optional[FeeType] = None
    monthly_fee_amount: Optional[Decimal] = Field(default=None, ge=0)
    payment_day: Optional[int] = Field(default=None, ge=1, le=31)
    discount_percentage: Optional[Decimal] = Field(default=None, ge=0, le=100)
    notes: Optional[str] = None
    status: Optional[StudentStatus] = None
    enrollment_date: Optional[date] = None


class StudentRead(StudentBase):
    id: int
    owner_id: int
    documents: list[StudentDocument] = []
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class InvoiceSyncRead(BaseModel):
    status: Literal["synced", "failed", "skipped"]
    updated_count: int = 0
    message: str


class StudentUpdateResult(StudentRead):
    """Updated student plus the outcome of syncing its pending invoices."""

    invoice_sync: InvoiceSyncRead
