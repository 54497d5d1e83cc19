"""Timestamp helpers."""

from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Return an aware UTC timestamp; all rows store UTC."""
    return datetime.now(timezone.utc)
