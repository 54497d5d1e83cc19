"""Database seeding helpers."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from restodesk.core.config import settings
from restodesk.core.security import get_password_hash
from restodesk.models.user import Profile
from restodesk.services.user_service import create_user, get_user_by_email

logger = logging.getLogger(__name__)


def ensure_admin_user(session: Session) -> bool:
    """Ensure an admin account exists in development only.

    Returns:
        bool: True when an admin was created by this call.
    """
    if settings.app_env != "dev":
        return False

    if session.scalar(select(Profile.user_id).where(Profile.role == "admin").limit(1)) is not None:
        return False
    if get_user_by_email(db=session, email=settings.admin_email) is not None:
        logger.warning("[BOOTSTRAP] %s exists without an admin profile; skipping seed.", settings.admin_email)
        return False

    create_user(
        db=session,
        email=settings.admin_email,
        hashed_password=get_password_hash(settings.admin_password),
        role="admin",
        full_name=settings.admin_full_name,
    )
    logger.warning("[SECURITY] Default admin account created: %s. Change the password immediately.", settings.admin_email)
    return True
