import pytest
from fastapi.testclient import TestClient

from courtdesk.app.db.base import Base
from courtdesk.app.db.session import SessionLocal, engine
from courtdesk.app.main import app
from courtdesk.app.models.user import User


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def test_successful_registration_returns_user():
    client = TestClient(app)
    payload = {"email": "coach@example.com", "password": "secret", "full_name": "Coach Ana"}
    response = client.post("/auth/register", json=payload)
    assert response.status_code == 200
    data = response.json()
    assert data["email"] == payload["email"]
    assert data["full_name"] == "Coach Ana"
    assert "password" not in data
    assert "hashed_password" not in data
    assert isinstance(data.get("id"), int)


def test_duplicate_email_returns_400():
    client = TestClient(app)
    payload = {"email": "dup@example.com", "password": "secret"}
    first = client.post("/auth/register", json=payload)
    assert first.status_code == 200
    second = client.post("/auth/register", json=payload)
    assert second.status_code == 400


def test_short_password_is_rejected():
    client = TestClient(app)
    response = client.post("/auth/register", json={"email": "short@example.com", "password": "abc"})
    assert response.status_code == 422


def test_user_persisted_in_db():
    client = TestClient(app)
    payload = {"email": "persist@example.com", "password": "secret"}
    response = client.post("/auth/register", json=payload)
    assert response.status_code == 200

    with SessionLocal() as db:
        user = db.query(User).filter(User.email == payload["email"]).first()
        assert user is not None
        assert user.hashed_password and user.hashed_password != payload["password"]


def test_password_strength_endpoint():
    client = TestClient(app)
    weak = client.post("/auth/password-strength", json={"password": "abc"})
    assert weak.status_code == 200
    assert weak.json() == {"score": 0, "label": "Very weak"}

    strong = client.post("/auth/password-strength", json={"password": "Secret#2024"})
    assert strong.json() == {"score": 5, "label": "Very strong"}
