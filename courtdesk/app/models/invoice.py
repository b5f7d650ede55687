"""Monthly invoice model."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import relationship

from courtdesk.app.core.time import utc_now
from courtdesk.app.db.base_class import Base

INVOICE_STATUSES = ("pending", "paid", "overdue")


class Invoice(Base):
    __tablename__ = "invoices"
    __table_args__ = (
        UniqueConstraint("student_id", "month_reference", "owner_id", name="uq_invoice_student_month_owner"),
    )

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    # Snapshot of the student's name when the invoice was generated
    student_name = Column(String, nullable=False)

    amount = Column(Numeric(10, 2), nullable=False)
    due_date = Column(Date, nullable=False)
    status = Column(String(10), nullable=False, default="pending")
    month_reference = Column(String(7), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    student = relationship("Student", back_populates="invoices")
    owner = relationship("User", back_populates="invoices")
