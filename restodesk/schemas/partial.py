"""Helpers for partial-update payloads."""

from collections.abc import Iterable

from pydantic import BaseModel


def reject_explicit_nulls(payload: BaseModel, required: Iterable[str]) -> None:
    """Raise when a client sends ``null`` for a column that cannot be empty.

    Omitted fields are fine; only keys present in the request are checked.
    """
    nulls = sorted(
        field for field in required if field in payload.model_fields_set and getattr(payload, field) is None
    )
    if nulls:
        raise ValueError(f"{', '.join(nulls)} cannot be null")
