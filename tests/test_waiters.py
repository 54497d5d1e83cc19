from fastapi.testclient import TestClient
from sqlalchemy import select

from restodesk.models import Profile, User


def test_admin_creates_lists_and_deletes_waiters(client: TestClient, admin_headers, session_local) -> None:
    created = client.post(
        "/api/v1/waiters",
        json={"email": "kasia@restodesk.local", "password": "waiter123", "full_name": "Kasia"},
        headers=admin_headers,
    )
    assert created.status_code == 201
    waiter_id = created.json()["id"]
    assert created.json()["role"] == "waiter"

    listed = client.get("/api/v1/waiters", headers=admin_headers)
    assert [row["email"] for row in listed.json()] == ["kasia@restodesk.local"]

    deleted = client.delete(f"/api/v1/waiters/{waiter_id}", headers=admin_headers)
    assert deleted.status_code == 204
    assert client.get("/api/v1/waiters", headers=admin_headers).json() == []

    with session_local() as db:
        assert db.get(User, waiter_id) is None
        assert db.get(Profile, waiter_id) is None


def test_duplicate_waiter_email_is_conflict(client: TestClient, admin_headers) -> None:
    payload = {"email": "kasia@restodesk.local", "password": "waiter123", "full_name": "Kasia"}
    assert client.post("/api/v1/waiters", json=payload, headers=admin_headers).status_code == 201
    assert client.post("/api/v1/waiters", json=payload, headers=admin_headers).status_code == 409


def test_admin_cannot_be_deleted_through_waiter_endpoint(client: TestClient, admin_headers, session_local) -> None:
    with session_local() as db:
        admin_id = db.scalar(select(Profile.user_id).where(Profile.role == "admin"))

    response = client.delete(f"/api/v1/waiters/{admin_id}", headers=admin_headers)
    assert response.status_code == 404


def test_waiter_cannot_manage_waiters(client: TestClient, waiter_headers) -> None:
    assert client.get("/api/v1/waiters", headers=waiter_headers).status_code == 403
    forbidden = client.post(
        "/api/v1/waiters",
        json={"email": "x@restodesk.local", "password": "waiter123", "full_name": "X"},
        headers=waiter_headers,
    )
    assert forbidden.status_code == 403
    assert forbidden.json()["detail"] == "Not enough permissions"
