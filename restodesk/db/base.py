"""Shared SQLAlchemy base declarative class and model imports."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models."""


# Import model modules so metadata is populated before create_all.
from restodesk.models import inventory as _inventory  # noqa: E402,F401
from restodesk.models import menu as _menu  # noqa: E402,F401
from restodesk.models import order as _order  # noqa: E402,F401
from restodesk.models import reservation as _reservation  # noqa: E402,F401
from restodesk.models import table as _table  # noqa: E402,F401
from restodesk.models import user as _user  # noqa: E402,F401
