"""Dashboard aggregates for an owner."""

from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session

from courtdesk.app.models.invoice import Invoice
from courtdesk.app.models.material import Material
from courtdesk.app.models.private_lesson import PrivateLesson
from courtdesk.app.models.student import Student
from courtdesk.app.models.tennis_class import TennisClass


def _count(db: Session, model, owner_id: int) -> int:
    return db.query(func.count(model.id)).filter(model.owner_id == owner_id).scalar() or 0


def get_dashboard_stats(db: Session, owner_id: int) -> dict:
    amounts = db.query(Invoice.amount, Invoice.status).filter(Invoice.owner_id == owner_id).all()
    revenue = Decimal("0.00")
    pending = Decimal("0.00")
    for amount, status in amounts:
        value = Decimal(str(amount or 0))
        if status == "paid":
            revenue += value
        else:
            pending += value

    return {
        "total_students": _count(db, Student, owner_id),
        "total_classes": _count(db, TennisClass, owner_id),
        "total_lessons": _count(db, PrivateLesson, owner_id),
        "total_materials": _count(db, Material, owner_id),
        "monthly_revenue": revenue.quantize(Decimal("0.01")),
        "pending_payments": pending.quantize(Decimal("0.01")),
    }
