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


def test_lesson_takes_name_from_student():
    client = TestClient(app)
    token = register_and_login(client, "lesson1@example.com", "secret")
    student_id = client.post("/students/", json={"name": "Ana"}, headers=auth(token)).json()["id"]

    resp = client.post(
        "/private-lessons/",
        json={"student_id": student_id, "student_name": "ignored", "date": "2024-03-05", "time": "09:30:00"},
        headers=auth(token),
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data["student_name"] == "Ana"
    assert data["type"] == "regular"


def test_lesson_for_walk_in_requires_name():
    client = TestClient(app)
    token = register_and_login(client, "lesson2@example.com", "secret")
    missing = client.post("/private-lessons/", json={"date": "2024-03-05", "time": "09:30:00"}, headers=auth(token))
    assert missing.status_code == 400

    walk_in = client.post(
        "/private-lessons/",
        json={"student_name": "Visitor", "date": "2024-03-05", "time": "09:30:00", "type": "trial"},
        headers=auth(token),
    )
    assert walk_in.status_code == 201
    assert walk_in.json()["student_id"] is None


def test_list_ordered_and_filtered_by_date():
    client = TestClient(app)
    token = register_and_login(client, "lesson3@example.com", "secret")
    for day, time, name in (("2024-03-06", "08:00:00", "C"), ("2024-03-05", "10:00:00", "B"), ("2024-03-05", "07:00:00", "A")):
        client.post("/private-lessons/", json={"student_name": name, "date": day, "time": time}, headers=auth(token))

    everything = client.get("/private-lessons/", headers=auth(token)).json()
    assert [lesson["student_name"] for lesson in everything] == ["A", "B", "C"]

    one_day = client.get("/private-lessons/?date=2024-03-05", headers=auth(token)).json()
    assert [lesson["student_name"] for lesson in one_day] == ["A", "B"]


def test_update_and_delete_lesson():
    client = TestClient(app)
    token = register_and_login(client, "lesson4@example.com", "secret")
    lesson_id = client.post(
        "/private-lessons/",
        json={"student_name": "Visitor", "date": "2024-03-05", "time": "09:30:00"},
        headers=auth(token),
    ).json()["id"]

    resp = client.put(f"/private-lessons/{lesson_id}", json={"type": "makeup", "notes": "Rain"}, headers=auth(token))
    assert resp.status_code == 200
    assert resp.json()["type"] == "makeup"
    assert resp.json()["student_name"] == "Visitor"

    assert client.delete(f"/private-lessons/{lesson_id}", headers=auth(token)).status_code == 204
    assert client.get(f"/private-lessons/{lesson_id}", headers=auth(token)).status_code == 404


def test_deleting_student_keeps_lesson_snapshot():
    client = TestClient(app)
    token = register_and_login(client, "lesson5@example.com", "secret")
    student_id = client.post("/students/", json={"name": "Ana"}, headers=auth(token)).json()["id"]
    lesson_id = client.post(
        "/private-lessons/",
        json={"student_id": student_id, "date": "2024-03-05", "time": "09:30:00"},
        headers=auth(token),
    ).json()["id"]

    client.delete(f"/students/{student_id}", headers=auth(token))
    lesson = client.get(f"/private-lessons/{lesson_id}", headers=auth(token)).json()
    assert lesson["student_id"] is None
    assert lesson["student_name"] == "Ana"
