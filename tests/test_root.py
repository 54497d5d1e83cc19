from fastapi.testclient import TestClient
from sqlalchemy import select

from restodesk.core.config import settings
from restodesk.db.seed import ensure_admin_user
from restodesk.models import Profile


def test_root_reports_status(client: TestClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert response.json() == {"name": settings.app_name, "status": "ok"}


def test_startup_seeds_single_admin(client: TestClient, session_local) -> None:
    with session_local() as db:
        assert ensure_admin_user(db) is False
        admins = db.scalars(select(Profile).where(Profile.role == "admin")).all()
        assert [profile.email for profile in admins] == [settings.admin_email]


def test_seed_is_skipped_outside_dev(db, monkeypatch) -> None:
    monkeypatch.setattr(settings, "app_env", "prod")

    assert ensure_admin_user(db) is False
    assert db.scalar(select(Profile.user_id).limit(1)) is None
