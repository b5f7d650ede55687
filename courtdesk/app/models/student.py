"""Student model for CourtDesk."""

from sqlalchemy import JSON, Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from courtdesk.app.core.time import utc_now
from courtdesk.app.db.base_class import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=True)
    phone = Column(String(50), nullable=True)
    badge_color = Column(String(20), nullable=True)
    badge_description = Column(String, nullable=True)
    birth_date = Column(Date, nullable=True)
    address = Column(String, nullable=True)
    emergency_contact = Column(String, nullable=True)
    emergency_phone = Column(String(50), nullable=True)
    medical_info = Column(Text, nullable=True)

    monthly_fee_type = Column(String(20), nullable=False, default="monthly")
    monthly_fee_amount = Column(Numeric(10, 2), nullable=True)
    payment_day = Column(Integer, nullable=True, default=5)
    discount_percentage = Column(Numeric(5, 2), nullable=True, default=0)

    notes = Column(Text, nullable=True)
    documents = Column(JSON, nullable=False, default=list)
    status = Column(String(20), nullable=False, default="active", index=True)
    enrollment_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    owner = relationship("User", back_populates="students", foreign_keys=[owner_id])
    invoices = relationship("Invoice", back_populates="student", cascade="all, delete-orphan", foreign_keys="Invoice.student_id")
    class_links = relationship("ClassStudent", back_populates="student", cascade="all, delete")
    private_lessons = relationship("PrivateLesson", back_populates="student")
