from fastapi.testclient import TestClient
from sqlalchemy import select

from restodesk.auth import WAITERS_MANAGE, can, capabilities_for
from restodesk.core.config import settings
from restodesk.core.security import create_access_token, get_password_hash
from restodesk.models import Profile, User


def test_login_returns_bearer_token_and_me_reports_capabilities(client: TestClient, admin_headers) -> None:
    response = client.get("/api/v1/auth/me", headers=admin_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["email"] == settings.admin_email
    assert body["role"] == "admin"
    assert WAITERS_MANAGE in body["capabilities"]


def test_login_rejects_wrong_password(client: TestClient) -> None:
    response = client.post("/api/v1/auth/login", json={"email": settings.admin_email, "password": "nope"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Incorrect email or password"


def test_me_requires_bearer_token(client: TestClient) -> None:
    assert client.get("/api/v1/auth/me").status_code in {401, 403}
    invalid = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert invalid.status_code == 401


def test_self_signup_after_first_account_is_waiter(client: TestClient, login) -> None:
    response = client.post(
        "/api/v1/auth/signup",
        json={"email": "Piotr@Restodesk.local", "password": "secret123", "full_name": "Piotr"},
    )

    assert response.status_code == 201
    assert response.json()["role"] == "waiter"
    assert response.json()["email"] == "piotr@restodesk.local"

    headers = login("piotr@restodesk.local", "secret123")
    me = client.get("/api/v1/auth/me", headers=headers)
    assert me.json()["role"] == "waiter"
    assert WAITERS_MANAGE not in me.json()["capabilities"]


def test_signup_rejects_duplicate_email(client: TestClient) -> None:
    payload = {"email": "dup@restodesk.local", "password": "secret123"}
    assert client.post("/api/v1/auth/signup", json=payload).status_code == 201

    duplicate = client.post("/api/v1/auth/signup", json=payload)
    assert duplicate.status_code == 409


def test_first_signup_on_empty_database_becomes_admin(client: TestClient, session_local) -> None:
    with session_local() as db:
        for user in db.scalars(select(User)).all():
            db.delete(user)
        db.commit()

    response = client.post("/api/v1/auth/signup", json={"email": "owner@restodesk.local", "password": "secret123"})

    assert response.status_code == 201
    assert response.json()["role"] == "admin"


def test_logout_revokes_token(client: TestClient, admin_headers) -> None:
    assert client.post("/api/v1/auth/logout", headers=admin_headers).status_code == 204

    response = client.get("/api/v1/auth/me", headers=admin_headers)
    assert response.status_code == 401
    assert response.json()["detail"] == "Session has been signed out"


def test_missing_profile_is_created_on_demand_as_waiter(client: TestClient, session_local) -> None:
    with session_local() as db:
        user = User(email="ghost@restodesk.local", password_hash=get_password_hash("secret123"), is_active=True)
        db.add(user)
        db.commit()
        user_id = user.id

    token = create_access_token({"sub": str(user_id)})
    response = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json()["role"] == "waiter"
    with session_local() as db:
        profile = db.get(Profile, user_id)
        assert profile is not None
        assert profile.role == "waiter"


def test_inactive_user_cannot_log_in(client: TestClient, session_local) -> None:
    with session_local() as db:
        db.add(User(email="off@restodesk.local", password_hash=get_password_hash("secret123"), is_active=False))
        db.commit()

    response = client.post("/api/v1/auth/login", json={"email": "off@restodesk.local", "password": "secret123"})
    assert response.status_code == 401


def test_capability_map() -> None:
    assert can("admin", WAITERS_MANAGE)
    assert not can("manager", WAITERS_MANAGE)
    assert not can("waiter", "menu:manage")
    assert can("waiter", "orders:operate")
    assert capabilities_for("unknown") == frozenset()
    assert capabilities_for(None) == frozenset()
