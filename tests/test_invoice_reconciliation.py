from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Query

from courtdesk.app.db.base import Base
from courtdesk.app.db.session import SessionLocal, engine
from courtdesk.app.models.invoice import Invoice
from courtdesk.app.models.student import Student
from courtdesk.app.models.user import User
from courtdesk.app.services.invoice_generation import generate_monthly_invoices
from courtdesk.app.services.invoice_reconciliation import (
    SYNC_FAILED,
    SYNCED,
    delete_invoice,
    delete_month_invoices,
    fee_change_requires_sync,
    pending_invoices_to_resync,
    sync_pending_invoice_amounts,
    update_invoice_status,
)


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def owner(db):
    user = User(email="coach@example.com", hashed_password="dummy")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def add_student(db, owner, name="Ana", fee=Decimal("200.00")) -> Student:
    student = Student(owner_id=owner.id, name=name, monthly_fee_amount=fee, status="active", documents=[])
    db.add(student)
    db.commit()
    db.refresh(student)
    return student


def amounts_by_month(db, student_id):
    rows = db.query(Invoice).filter(Invoice.student_id == student_id).all()
    return {row.month_reference: (row.status, Decimal(str(row.amount))) for row in rows}


def test_fee_change_requires_sync():
    assert fee_change_requires_sync(Decimal("200"), Decimal("250"))
    assert fee_change_requires_sync(None, Decimal("250"))
    assert not fee_change_requires_sync(Decimal("200"), Decimal("200.00"))
    assert not fee_change_requires_sync(Decimal("200"), Decimal("0"))
    assert not fee_change_requires_sync(Decimal("200"), None)


def test_pending_invoices_to_resync_filters_status_and_amount():
    invoices = [
        Invoice(id=1, status="pending", amount=Decimal("200")),
        Invoice(id=2, status="paid", amount=Decimal("200")),
        Invoice(id=3, status="pending", amount=Decimal("250")),
        Invoice(id=4, status="overdue", amount=Decimal("200")),
    ]
    assert [i.id for i in pending_invoices_to_resync(invoices, Decimal("250"))] == [1]


def test_sync_updates_only_pending_invoices(db, owner):
    ana = add_student(db, owner)
    generate_monthly_invoices(db, owner.id, 2024, 3)
    generate_monthly_invoices(db, owner.id, 2024, 4)
    generate_monthly_invoices(db, owner.id, 2024, 5)
    march = db.query(Invoice).filter(Invoice.month_reference == "2024-03").one()
    may = db.query(Invoice).filter(Invoice.month_reference == "2024-05").one()
    update_invoice_status(db, owner.id, march.id, "paid")
    update_invoice_status(db, owner.id, may.id, "overdue")

    result = sync_pending_invoice_amounts(db, owner.id, ana.id, Decimal("250.00"))

    assert result.status == SYNCED
    assert result.updated_count == 1
    db.expire_all()
    assert amounts_by_month(db, ana.id) == {
        "2024-03": ("paid", Decimal("200.00")),
        "2024-04": ("pending", Decimal("250.00")),
        "2024-05": ("overdue", Decimal("200.00")),
    }


def test_sync_failure_is_reported_not_raised(db, owner, monkeypatch):
    ana = add_student(db, owner)
    generate_monthly_invoices(db, owner.id, 2024, 3)

    def boom(self, *args, **kwargs):
        raise OperationalError("UPDATE", {}, Exception("database is locked"))

    monkeypatch.setattr(Query, "update", boom)
    result = sync_pending_invoice_amounts(db, owner.id, ana.id, Decimal("250.00"))

    assert result.status == SYNC_FAILED
    assert "database is locked" in result.message
    monkeypatch.undo()
    assert amounts_by_month(db, ana.id)["2024-03"] == ("pending", Decimal("200.00"))


def test_status_transitions_are_free(db, owner):
    add_student(db, owner)
    invoice = generate_monthly_invoices(db, owner.id, 2024, 3).invoices[0]
    for status in ("paid", "pending", "overdue", "paid"):
        assert update_invoice_status(db, owner.id, invoice.id, status).status == status


def test_unknown_status_is_rejected(db, owner):
    add_student(db, owner)
    invoice = generate_monthly_invoices(db, owner.id, 2024, 3).invoices[0]
    with pytest.raises(ValueError):
        update_invoice_status(db, owner.id, invoice.id, "cancelled")


def test_other_owner_cannot_touch_invoice(db, owner):
    add_student(db, owner)
    invoice = generate_monthly_invoices(db, owner.id, 2024, 3).invoices[0]
    assert update_invoice_status(db, owner.id + 1, invoice.id, "paid") is None
    assert delete_invoice(db, owner.id + 1, invoice.id) is False


def test_delete_single_invoice(db, owner):
    add_student(db, owner)
    invoice = generate_monthly_invoices(db, owner.id, 2024, 3).invoices[0]
    assert delete_invoice(db, owner.id, invoice.id) is True
    assert db.query(Invoice).count() == 0


def test_delete_month_leaves_other_months(db, owner):
    add_student(db, owner, "Ana")
    add_student(db, owner, "Duda", Decimal("180.00"))
    generate_monthly_invoices(db, owner.id, 2024, 3)
    generate_monthly_invoices(db, owner.id, 2024, 4)

    assert delete_month_invoices(db, owner.id, "2024-03") == 2
    remaining = {row.month_reference for row in db.query(Invoice).all()}
    assert remaining == {"2024-04"}
