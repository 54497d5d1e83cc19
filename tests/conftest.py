from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from restodesk.core.config import settings
from restodesk.db.base import Base
from restodesk.db.session import create_db_engine
from restodesk.main import app
from restodesk.services.live_cache import collection_cache


@pytest.fixture
def session_local(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[sessionmaker]:
    db_file = tmp_path / "restodesk.db"
    engine = create_db_engine(f"sqlite:///{db_file}")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr("restodesk.db.session.engine", engine)
    monkeypatch.setattr("restodesk.db.session.SessionLocal", testing_session_local)
    collection_cache.clear()
    yield testing_session_local
    engine.dispose()


@pytest.fixture
def db(session_local: sessionmaker) -> Iterator[Session]:
    with session_local() as session:
        yield session


@pytest.fixture
def client(session_local: sessionmaker) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def login(client: TestClient) -> Callable[[str, str], dict[str, str]]:
    def _login(email: str, password: str) -> dict[str, str]:
        response = client.post("/api/v1/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login


@pytest.fixture
def admin_headers(login: Callable[[str, str], dict[str, str]]) -> dict[str, str]:
    return login(settings.admin_email, settings.admin_password)


@pytest.fixture
def waiter_headers(
    client: TestClient,
    admin_headers: dict[str, str],
    login: Callable[[str, str], dict[str, str]],
) -> dict[str, str]:
    created = client.post(
        "/api/v1/waiters",
        json={"email": "anna@restodesk.local", "password": "waiter123", "full_name": "Anna Waiter"},
        headers=admin_headers,
    )
    assert created.status_code == 201, created.text
    return login("anna@restodesk.local", "waiter123")
