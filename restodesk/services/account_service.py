"""Sign-up, sign-in and waiter account administration."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from restodesk.core.security import get_password_hash, verify_password
from restodesk.models.user import Profile, User
from restodesk.services.change_feed import change_feed
from restodesk.services.errors import ConflictError, NotFoundError
from restodesk.services.user_service import count_profiles, create_user, get_user_by_email, list_profiles_by_role

logger = logging.getLogger(__name__)


def sign_up(db: Session, email: str, password: str, full_name: str | None) -> User:
    """Register a staff account.

    The very first account becomes the admin; later self sign-ups are waiters.
    """
    if get_user_by_email(db, email) is not None:
        raise ConflictError("Email already registered")
    role = "admin" if count_profiles(db) == 0 else "waiter"
    user = create_user(db=db, email=email, hashed_password=get_password_hash(password), role=role, full_name=full_name)
    logger.info("[AUTH] Signed up user_id=%s role=%s", user.id, role)
    return user


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    user = get_user_by_email(db, email)
    if user is None or not user.is_active:
        return None
    if not verify_password(password, user.password_hash):
        return None
    user.last_login_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)
    return user


def list_waiters(db: Session) -> list[Profile]:
    """Return waiter profiles, newest first."""
    return list_profiles_by_role(db, "waiter")


def create_waiter(db: Session, email: str, password: str, full_name: str) -> Profile:
    if get_user_by_email(db, email) is not None:
        raise ConflictError("Email already registered")
    user = create_user(db=db, email=email, hashed_password=get_password_hash(password), role="waiter", full_name=full_name)
    logger.info("[AUTH] Waiter account created user_id=%s", user.id)
    return user.profile


def delete_waiter(db: Session, user_id: int) -> None:
    """Remove a waiter's identity and profile; other roles cannot be removed here."""
    profile = db.get(Profile, user_id)
    if profile is None or profile.role != "waiter":
        raise NotFoundError(f"Waiter {user_id} not found")
    user = db.get(User, user_id)
    if user is not None:
        db.delete(user)
    else:
        db.delete(profile)
    db.commit()
    logger.info("[AUTH] Waiter account deleted user_id=%s", user_id)
    change_feed.publish("profiles")
