"""Order lifecycle: creation, appended lines, status writes and totals."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from restodesk.models.menu import MenuItem
from restodesk.models.order import Order, OrderItem
from restodesk.models.table import DiningTable
from restodesk.models.user import User
from restodesk.schemas.order import OrderItemCreate
from restodesk.services import order_status
from restodesk.services.change_feed import change_feed
from restodesk.services.errors import NotFoundError, ValidationError
from restodesk.utils.time import utcnow

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def _money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def _order_query():
    return select(Order).options(
        selectinload(Order.table),
        selectinload(Order.items).selectinload(OrderItem.menu_item),
    )


def list_orders(db: Session, status: str | None = None) -> list[Order]:
    """Return orders newest first with table, lines and dishes loaded."""
    query = _order_query()
    if status is not None:
        query = query.where(Order.status == status)
    return list(db.scalars(query.order_by(Order.created_at.desc(), Order.id.desc())).all())


def get_order(db: Session, order_id: int) -> Order:
    order = db.scalar(_order_query().where(Order.id == order_id))
    if order is None:
        raise NotFoundError(f"Order {order_id} not found")
    return order


def get_order_item(db: Session, item_id: int) -> OrderItem:
    item = db.get(OrderItem, item_id)
    if item is None:
        raise NotFoundError(f"Order item {item_id} not found")
    return item


def line_unit_price(menu_item: MenuItem, weight_kg: Decimal | None) -> Decimal:
    """Price of one unit of a line; weight-based dishes are priced by weight."""
    if menu_item.is_weight_based:
        if weight_kg is None:
            raise ValidationError(f"Dish {menu_item.name} is sold by weight; weight_kg is required")
        return _money(Decimal(menu_item.price_per_kg or 0) * Decimal(weight_kg))
    return _money(Decimal(menu_item.price))


def line_total(item: OrderItem) -> Decimal:
    return _money(Decimal(item.unit_price) * item.quantity)


def recalculate_total(order: Order) -> Decimal:
    """Persisted total: sum of line snapshots, or of child orders for an umbrella."""
    if order.child_orders:
        total = sum((Decimal(child.total_amount) for child in order.child_orders), Decimal("0"))
    else:
        total = sum((line_total(item) for item in order.items), Decimal("0"))
    order.total_amount = _money(total)
    return order.total_amount


def display_total(order: Order) -> Decimal:
    """Presentation total from current menu prices.

    Differs from ``total_amount`` once a dish price changes after ordering.
    """
    total = Decimal("0")
    for item in order.items:
        if item.menu_item is None:
            continue
        total += Decimal(item.menu_item.price) * item.quantity
    return _money(total)


def _build_items(db: Session, lines: Sequence[OrderItemCreate]) -> list[OrderItem]:
    if not lines:
        raise ValidationError("An order needs at least one item")

    dish_ids = {line.menu_item_id for line in lines}
    dishes = {dish.id: dish for dish in db.scalars(select(MenuItem).where(MenuItem.id.in_(dish_ids))).all()}

    items: list[OrderItem] = []
    for line in lines:
        dish = dishes.get(line.menu_item_id)
        if dish is None:
            raise NotFoundError(f"Menu item {line.menu_item_id} not found")
        if not dish.is_available:
            raise ValidationError(f"Menu item {dish.name} is not available")
        if line.quantity < 1:
            raise ValidationError("Quantity must be >= 1")
        items.append(
            OrderItem(
                menu_item=dish,
                quantity=line.quantity,
                notes=line.notes,
                weight_kg=line.weight_kg,
                unit_price=line_unit_price(dish, line.weight_kg),
                status="pending",
            )
        )
    return items


def _open_umbrella(db: Session, primary: DiningTable) -> Order | None:
    """Return the unpaid umbrella order already grouping the primary's merge."""
    candidates = db.scalars(
        select(Order)
        .where(
            Order.table_id == primary.id,
            Order.parent_order_id.is_(None),
            Order.status.not_in(sorted(order_status.TERMINAL_STATUSES)),
        )
        .order_by(Order.id.desc())
    ).all()
    for candidate in candidates:
        if candidate.child_orders:
            return candidate
    return None


def create_order(
    db: Session,
    *,
    table_id: int,
    waiter: User | None,
    items: Sequence[OrderItemCreate],
    notes: str | None = None,
    create_umbrella: bool = False,
) -> Order:
    """Create a pending order and its lines in one transaction.

    With ``create_umbrella`` and a table belonging to a merge, the order is
    linked to an umbrella order on the merge's primary table.
    """
    table = db.get(DiningTable, table_id)
    if table is None:
        raise NotFoundError(f"Table {table_id} not found")

    try:
        order = Order(
            table=table,
            waiter_id=waiter.id if waiter is not None else None,
            status="pending",
            notes=notes,
        )
        order.items = _build_items(db, items)
        recalculate_total(order)
        db.add(order)

        primary = table.merged_into or table
        if create_umbrella and primary.members:
            umbrella = _open_umbrella(db, primary)
            if umbrella is None:
                member_numbers = ", ".join(str(member.number) for member in primary.members)
                umbrella = Order(
                    table=primary,
                    waiter_id=order.waiter_id,
                    status="pending",
                    notes=f"Tables {primary.number}, {member_numbers}",
                )
                db.add(umbrella)
            order.parent_order = umbrella
            db.flush()
            recalculate_total(umbrella)

        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("[ORDERS] Created order id=%s table=%s items=%s", order.id, table_id, len(items))
    change_feed.publish("orders")
    return get_order(db, order.id)


def add_items(db: Session, order: Order, items: Sequence[OrderItemCreate]) -> Order:
    """Append lines to an existing order; its status is left untouched."""
    try:
        for item in _build_items(db, items):
            order.items.append(item)
        recalculate_total(order)
        order.updated_at = utcnow()
        if order.parent_order is not None:
            db.flush()
            recalculate_total(order.parent_order)
        db.commit()
    except Exception:
        db.rollback()
        raise

    change_feed.publish("orders")
    return get_order(db, order.id)


def set_order_status(db: Session, order: Order, new_status: str) -> Order:
    """Write any order status; leaving the forward flow is logged as an override."""
    if not order_status.is_valid_order_status(new_status):
        raise ValidationError(f"Unknown order status: {new_status}")
    previous = order.status
    if order_status.is_override(previous, new_status):
        logger.warning("[ORDERS] Status override order_id=%s %s -> %s", order.id, previous, new_status)
    order_status.set_status(order, new_status, utcnow())
    db.commit()
    change_feed.publish("orders")
    return get_order(db, order.id)


def set_item_status(db: Session, item: OrderItem, new_status: str) -> OrderItem:
    if not order_status.is_valid_item_status(new_status):
        raise ValidationError(f"Unknown order item status: {new_status}")
    order_status.set_item_status(item, new_status, utcnow())
    db.commit()
    db.refresh(item)
    change_feed.publish("orders")
    return item


def close_bill(db: Session, order: Order) -> Order:
    return set_order_status(db, order, "paid")


def delete_order(db: Session, order: Order) -> None:
    """Hard delete; lines go with the order, child orders lose their umbrella link.

    Deleting a child order refreshes its umbrella's total.
    """
    order_id = order.id
    parent = order.parent_order
    try:
        for child in list(order.child_orders):
            child.parent_order = None
        if parent is not None:
            order.parent_order = None
        db.delete(order)
        db.flush()
        if parent is not None:
            recalculate_total(parent)
            parent.updated_at = utcnow()
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("[ORDERS] Deleted order id=%s", order_id)
    change_feed.publish("orders")
