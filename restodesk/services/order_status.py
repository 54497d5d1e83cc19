"""Order status helpers.

Any status may be written from any other one so staff can correct mistakes;
the forward graph below only decides which writes are reported as overrides.
"""

from __future__ import annotations

from datetime import datetime

from restodesk.models.order import ORDER_ITEM_STATUSES, ORDER_STATUSES, Order, OrderItem

TERMINAL_STATUSES: frozenset[str] = frozenset({"paid", "cancelled"})

FORWARD_TRANSITIONS: dict[str, set[str]] = {
    "pending": {"preparing", "ready", "served", "paid", "cancelled"},
    "preparing": {"ready", "served", "paid", "cancelled"},
    "ready": {"served", "paid", "cancelled"},
    "served": {"paid", "cancelled"},
    "paid": set(),
    "cancelled": set(),
}


def is_valid_order_status(value: str) -> bool:
    return value in ORDER_STATUSES


def is_valid_item_status(value: str) -> bool:
    return value in ORDER_ITEM_STATUSES


def is_override(current: str, new: str) -> bool:
    """Return whether moving current -> new leaves the normal forward flow."""
    if current == new:
        return False
    return new not in FORWARD_TRANSITIONS.get(current, set())


def set_status(order: Order, new_status: str, now: datetime) -> None:
    order.status = new_status
    order.updated_at = now


def set_item_status(item: OrderItem, new_status: str, now: datetime) -> None:
    item.status = new_status
    item.updated_at = now
