from decimal import Decimal
from urllib.parse import unquote

import pytest
from fastapi.testclient import TestClient

from courtdesk.app.db.base import Base
from courtdesk.app.db.session import engine
from courtdesk.app.main import app


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def register_and_login(client: TestClient, email: str, password: str) -> str:
    client.post("/auth/register", json={"email": email, "password": password})
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    return response.json()["access_token"]


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def create_student(client: TestClient, token: str, **fields) -> dict:
    payload = {"name": "Ana", "monthly_fee_amount": "200.00", **fields}
    response = client.post("/students/", json=payload, headers=auth(token))
    assert response.status_code == 201
    return response.json()


def generate(client: TestClient, token: str, year: int = 2024, month: int = 3):
    return client.post("/invoices/generate", json={"year": year, "month": month}, headers=auth(token))


def test_generate_creates_invoices_with_201():
    client = TestClient(app)
    token = register_and_login(client, "gen@example.com", "secret")
    create_student(client, token, name="Ana")
    create_student(client, token, name="Bia", monthly_fee_amount="0")
    create_student(client, token, name="Caio", monthly_fee_amount="150.00", status="inactive")

    resp = generate(client, token)
    assert resp.status_code == 201
    data = resp.json()
    assert data["status"] == "created"
    assert data["created_count"] == 1
    assert data["total_count"] == 1
    assert data["month_reference"] == "2024-03"
    assert data["message"] == "1 invoices were generated for March/2024."
    invoice = data["invoices"][0]
    assert invoice["student_name"] == "Ana"
    assert invoice["due_date"] == "2024-04-10"
    assert Decimal(str(invoice["amount"])) == Decimal("200.00")


def test_repeat_generation_returns_200_no_op():
    client = TestClient(app)
    token = register_and_login(client, "repeat@example.com", "secret")
    create_student(client, token)
    assert generate(client, token).status_code == 201

    resp = generate(client, token)
    assert resp.status_code == 200
    assert resp.json()["status"] == "already_invoiced"
    assert resp.json()["created_count"] == 0


def test_generate_without_students_is_informational():
    client = TestClient(app)
    token = register_and_login(client, "empty@example.com", "secret")
    resp = generate(client, token)
    assert resp.status_code == 200
    assert resp.json()["status"] == "no_active_students"


def test_generate_rejects_invalid_month():
    client = TestClient(app)
    token = register_and_login(client, "badmonth@example.com", "secret")
    resp = generate(client, token, month=13)
    assert resp.status_code == 422


def test_list_and_summary_for_month():
    client = TestClient(app)
    token = register_and_login(client, "list@example.com", "secret")
    create_student(client, token, name="Ana", monthly_fee_amount="200.00")
    create_student(client, token, name="Duda", monthly_fee_amount="180.00")
    generate(client, token)

    listed = client.get("/invoices/?month=2024-03", headers=auth(token))
    assert listed.status_code == 200
    invoices = listed.json()
    assert [i["student_name"] for i in invoices] == ["Ana", "Duda"]

    client.patch(f"/invoices/{invoices[0]['id']}/status", json={"status": "paid"}, headers=auth(token))

    summary = client.get("/invoices/summary?month=2024-03", headers=auth(token)).json()
    assert summary["invoice_count"] == 2
    assert Decimal(str(summary["total"])) == Decimal("380.00")
    assert Decimal(str(summary["paid"])) == Decimal("200.00")
    assert Decimal(str(summary["pending"])) == Decimal("180.00")
    assert Decimal(str(summary["overdue"])) == Decimal("0.00")

    other_month = client.get("/invoices/?month=2024-04", headers=auth(token))
    assert other_month.json() == []


def test_list_rejects_malformed_month():
    client = TestClient(app)
    token = register_and_login(client, "malformed@example.com", "secret")
    resp = client.get("/invoices/?month=2024-3", headers=auth(token))
    assert resp.status_code == 422


def test_status_update_and_invalid_status():
    client = TestClient(app)
    token = register_and_login(client, "status@example.com", "secret")
    create_student(client, token)
    invoice_id = generate(client, token).json()["invoices"][0]["id"]

    resp = client.patch(f"/invoices/{invoice_id}/status", json={"status": "overdue"}, headers=auth(token))
    assert resp.status_code == 200
    assert resp.json()["status"] == "overdue"

    resp = client.patch(f"/invoices/{invoice_id}/status", json={"status": "pending"}, headers=auth(token))
    assert resp.json()["status"] == "pending"

    bad = client.patch(f"/invoices/{invoice_id}/status", json={"status": "cancelled"}, headers=auth(token))
    assert bad.status_code == 422


def test_invoices_are_owner_scoped():
    client = TestClient(app)
    token_a = register_and_login(client, "ownera@example.com", "secret")
    token_b = register_and_login(client, "ownerb@example.com", "secret")
    create_student(client, token_a)
    invoice_id = generate(client, token_a).json()["invoices"][0]["id"]

    assert client.get(f"/invoices/{invoice_id}", headers=auth(token_b)).status_code == 404
    assert client.delete(f"/invoices/{invoice_id}", headers=auth(token_b)).status_code == 404
    assert client.get("/invoices/?month=2024-03", headers=auth(token_b)).json() == []


def test_delete_single_invoice_then_regenerate():
    client = TestClient(app)
    token = register_and_login(client, "redo@example.com", "secret")
    create_student(client, token, name="Ana")
    create_student(client, token, name="Duda", monthly_fee_amount="180.00")
    invoices = generate(client, token).json()["invoices"]

    resp = client.delete(f"/invoices/{invoices[1]['id']}", headers=auth(token))
    assert resp.status_code == 204

    again = generate(client, token)
    assert again.status_code == 201
    data = again.json()
    assert data["created_count"] == 1
    assert data["existing_count"] == 1
    assert data["message"] == "1 new invoice(s) added. Total: 2 invoices for March/2024."


def test_delete_whole_month():
    client = TestClient(app)
    token = register_and_login(client, "wipe@example.com", "secret")
    create_student(client, token)
    generate(client, token, 2024, 3)
    generate(client, token, 2024, 4)

    resp = client.delete("/invoices/?month=2024-03", headers=auth(token))
    assert resp.status_code == 200
    assert resp.json() == {"month_reference": "2024-03", "deleted": 1}
    assert client.get("/invoices/?month=2024-03", headers=auth(token)).json() == []
    assert len(client.get("/invoices/?month=2024-04", headers=auth(token)).json()) == 1


def test_whatsapp_link():
    client = TestClient(app)
    token = register_and_login(client, "wa@example.com", "secret")
    create_student(client, token, name="Ana", phone="(11) 98765-4321", monthly_fee_amount="1234.50")
    invoice_id = generate(client, token).json()["invoices"][0]["id"]

    resp = client.get(f"/invoices/{invoice_id}/whatsapp-link", headers=auth(token))
    assert resp.status_code == 200
    data = resp.json()
    assert data["phone"] == "5511987654321"
    assert data["url"].startswith("https://wa.me/5511987654321?text=")
    assert "R$ 1.234,50" in data["message"]
    assert "10/04/2024" in data["message"]
    assert unquote(data["url"].split("text=", 1)[1]) == data["message"]


def test_whatsapp_link_without_phone_is_conflict():
    client = TestClient(app)
    token = register_and_login(client, "nophone@example.com", "secret")
    create_student(client, token)
    invoice_id = generate(client, token).json()["invoices"][0]["id"]

    resp = client.get(f"/invoices/{invoice_id}/whatsapp-link", headers=auth(token))
    assert resp.status_code == 409
    assert resp.json()["detail"] == "Student has no phone number"
