"""Stock items and the movement ledger."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.orm import Session, selectinload

from restodesk.models.inventory import MOVEMENT_TYPES, InventoryItem, InventoryMovement
from restodesk.models.user import User
from restodesk.services.change_feed import change_feed
from restodesk.services.errors import NotFoundError, ValidationError
from restodesk.utils.time import utcnow

logger = logging.getLogger(__name__)


def list_inventory_items(db: Session) -> list[InventoryItem]:
    return list(db.scalars(select(InventoryItem).order_by(InventoryItem.name.asc(), InventoryItem.id.asc())).all())


def get_inventory_item(db: Session, item_id: int) -> InventoryItem:
    item = db.get(InventoryItem, item_id)
    if item is None:
        raise NotFoundError(f"Inventory item {item_id} not found")
    return item


def create_inventory_item(
    db: Session,
    *,
    name: str,
    quantity: Decimal,
    unit: str,
    minimum_quantity: Decimal,
) -> InventoryItem:
    item = InventoryItem(name=name, quantity=quantity, unit=unit, minimum_quantity=minimum_quantity)
    db.add(item)
    db.commit()
    db.refresh(item)
    change_feed.publish("inventory")
    return item


def update_inventory_item(db: Session, item: InventoryItem, changes: dict[str, Any]) -> InventoryItem:
    for field, value in changes.items():
        setattr(item, field, value)
    item.updated_at = utcnow()
    db.commit()
    db.refresh(item)
    change_feed.publish("inventory")
    return item


def delete_inventory_item(db: Session, item: InventoryItem) -> None:
    """Delete an item with its movements and the recipe lines that use it."""
    db.delete(item)
    db.commit()
    change_feed.publish("inventory")
    change_feed.publish("recipes")


def update_inventory_quantity(db: Session, item_id: int, delta: Decimal) -> Decimal:
    """Add ``delta`` to the stored quantity in a single UPDATE statement.

    Does not commit; the caller owns the transaction. Returns the new quantity
    and raises when the item is missing or the result would drop below zero.
    """
    new_quantity = db.execute(
        update(InventoryItem)
        .where(InventoryItem.id == item_id, InventoryItem.quantity + delta >= 0)
        .values(quantity=InventoryItem.quantity + delta, updated_at=utcnow())
        .returning(InventoryItem.quantity)
        .execution_options(synchronize_session="fetch")
    ).scalar_one_or_none()
    if new_quantity is not None:
        return Decimal(new_quantity)
    if db.get(InventoryItem, item_id) is None:
        raise NotFoundError(f"Inventory item {item_id} not found")
    raise ValidationError(f"Not enough stock on inventory item {item_id}")


def add_movement(
    db: Session,
    *,
    item_id: int,
    movement_type: str,
    quantity: Decimal,
    created_by: User | None,
    notes: str | None = None,
) -> InventoryMovement:
    """Record a movement and apply its signed quantity in one transaction.

    Each call changes stock again: two ``in`` movements of 5 add 10.
    """
    if movement_type not in MOVEMENT_TYPES:
        raise ValidationError(f"Unknown movement type: {movement_type}")
    if quantity <= 0:
        raise ValidationError("Movement quantity must be positive")
    get_inventory_item(db, item_id)

    delta = quantity if movement_type == "in" else -quantity
    try:
        movement = InventoryMovement(
            inventory_item_id=item_id,
            type=movement_type,
            quantity=quantity,
            notes=notes,
            created_by=created_by.id if created_by is not None else None,
        )
        db.add(movement)
        db.flush()
        update_inventory_quantity(db, item_id, delta)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(movement)
    logger.info("[INVENTORY] Movement %s %s on item_id=%s", movement_type, quantity, item_id)
    change_feed.publish("inventory")
    return movement


def list_movements(db: Session, item_id: int) -> list[InventoryMovement]:
    """Return an item's ledger newest first."""
    get_inventory_item(db, item_id)
    return list(
        db.scalars(
            select(InventoryMovement)
            .where(InventoryMovement.inventory_item_id == item_id)
            .options(selectinload(InventoryMovement.creator).selectinload(User.profile))
            .order_by(InventoryMovement.created_at.desc(), InventoryMovement.id.desc())
        ).all()
    )
