from decimal import Decimal

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


def test_material_crud():
    client = TestClient(app)
    token = register_and_login(client, "materials@example.com", "secret")
    headers = {"Authorization": f"Bearer {token}"}

    payload = {"name": "Balls", "quantity": 24, "price": "89.90", "purchase_date": "2024-02-01"}
    created = client.post("/materials/", json=payload, headers=headers)
    assert created.status_code == 201
    material_id = created.json()["id"]
    client.post("/materials/", json={**payload, "name": "Anti-vibration dampeners"}, headers=headers)

    listed = client.get("/materials/", headers=headers).json()
    assert [m["name"] for m in listed] == ["Anti-vibration dampeners", "Balls"]

    updated = client.put(f"/materials/{material_id}", json={"quantity": 12}, headers=headers)
    assert updated.json()["quantity"] == 12
    assert Decimal(str(updated.json()["price"])) == Decimal("89.90")

    assert client.delete(f"/materials/{material_id}", headers=headers).status_code == 204
    assert client.get(f"/materials/{material_id}", headers=headers).status_code == 404


def test_negative_quantity_is_rejected():
    client = TestClient(app)
    token = register_and_login(client, "materials2@example.com", "secret")
    resp = client.post(
        "/materials/",
        json={"name": "Grips", "quantity": -1, "price": "10", "purchase_date": "2024-02-01"},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert resp.status_code == 422
