"""User and profile persistence helpers."""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from restodesk.models.user import Profile, User, normalize_role
from restodesk.services.change_feed import change_feed


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.scalar(select(User).where(User.email == email.strip().lower()).limit(1))


def get_user_by_id(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def count_profiles(db: Session) -> int:
    return int(db.scalar(select(func.count()).select_from(Profile)) or 0)


def create_user(
    db: Session,
    email: str,
    hashed_password: str,
    role: str,
    full_name: str | None = None,
) -> User:
    """Create an identity together with its staff profile."""
    canonical_role = normalize_role(role)
    normalized_email = email.strip().lower()
    user = User(email=normalized_email, password_hash=hashed_password, is_active=True)
    db.add(user)
    db.flush()
    db.add(Profile(user_id=user.id, email=normalized_email, full_name=full_name, role=canonical_role))
    db.commit()
    db.refresh(user)
    change_feed.publish("profiles")
    return user


def ensure_profile(db: Session, user: User) -> Profile:
    """Return the user's profile, creating a waiter profile when it is missing."""
    profile = db.get(Profile, user.id)
    if profile is not None:
        return profile

    profile = Profile(user_id=user.id, email=user.email, full_name=None, role="waiter")
    db.add(profile)
    db.commit()
    db.refresh(profile)
    change_feed.publish("profiles")
    return profile


def list_profiles_by_role(db: Session, role: str) -> list[Profile]:
    return list(
        db.scalars(
            select(Profile).where(Profile.role == normalize_role(role)).order_by(Profile.created_at.desc(), Profile.user_id.desc())
        ).all()
    )
