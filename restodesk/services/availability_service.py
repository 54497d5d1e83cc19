"""Recipes and the ingredient-driven availability of dishes.

A dish with a recipe is sellable iff every recipe line's required quantity is
covered by the ingredient's current stock. Dishes without a recipe keep the
availability flag staff set by hand.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, selectinload

from restodesk.core.config import settings
from restodesk.db import session as db_session
from restodesk.models.inventory import InventoryItem
from restodesk.models.menu import MenuItem, MenuItemIngredient
from restodesk.schemas.menu import RecipeLineWrite
from restodesk.services.change_feed import ChangeFeed, change_feed
from restodesk.services.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngredientCheck:
    ingredient_name: str
    required_quantity: Decimal
    available_quantity: Decimal
    unit: str

    @property
    def is_short(self) -> bool:
        return self.available_quantity < self.required_quantity


@dataclass(frozen=True)
class Availability:
    available: bool
    missing: list[dict[str, object]]


def _require_menu_item(db: Session, menu_item_id: int) -> MenuItem:
    menu_item = db.get(MenuItem, menu_item_id)
    if menu_item is None:
        raise NotFoundError(f"Menu item {menu_item_id} not found")
    return menu_item


def get_recipe(db: Session, menu_item_id: int) -> list[MenuItemIngredient]:
    """Return recipe lines with a snapshot of each ingredient's stock."""
    _require_menu_item(db, menu_item_id)
    return list(
        db.scalars(
            select(MenuItemIngredient)
            .where(MenuItemIngredient.menu_item_id == menu_item_id)
            .options(selectinload(MenuItemIngredient.inventory_item))
            .order_by(MenuItemIngredient.id.asc())
        ).all()
    )


def set_recipe(db: Session, menu_item_id: int, lines: Sequence[RecipeLineWrite]) -> list[MenuItemIngredient]:
    """Replace the whole recipe of a dish in one transaction."""
    _require_menu_item(db, menu_item_id)
    ingredient_ids = [line.inventory_item_id for line in lines]
    if len(set(ingredient_ids)) != len(ingredient_ids):
        raise ValidationError("Each ingredient may appear only once in a recipe")
    if ingredient_ids:
        known = set(db.scalars(select(InventoryItem.id).where(InventoryItem.id.in_(ingredient_ids))).all())
        unknown = [item_id for item_id in ingredient_ids if item_id not in known]
        if unknown:
            raise NotFoundError(f"Inventory items not found: {unknown}")

    try:
        db.execute(
            delete(MenuItemIngredient)
            .where(MenuItemIngredient.menu_item_id == menu_item_id)
            .execution_options(synchronize_session="fetch")
        )
        db.add_all(
            MenuItemIngredient(
                menu_item_id=menu_item_id,
                inventory_item_id=line.inventory_item_id,
                quantity=line.quantity,
                unit=line.unit,
            )
            for line in lines
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("[AVAILABILITY] Recipe for menu_item_id=%s replaced with %s lines", menu_item_id, len(lines))
    change_feed.publish("recipes")
    return get_recipe(db, menu_item_id)


def check_ingredients_availability(db: Session, menu_item_id: int) -> list[IngredientCheck]:
    """Per-ingredient required vs. available stock for one dish."""
    _require_menu_item(db, menu_item_id)
    rows = db.execute(
        select(InventoryItem.name, MenuItemIngredient.quantity, InventoryItem.quantity, MenuItemIngredient.unit)
        .join(InventoryItem, MenuItemIngredient.inventory_item_id == InventoryItem.id)
        .where(MenuItemIngredient.menu_item_id == menu_item_id)
        .order_by(MenuItemIngredient.id.asc())
    ).all()
    return [
        IngredientCheck(
            ingredient_name=name,
            required_quantity=Decimal(required),
            available_quantity=Decimal(available),
            unit=unit,
        )
        for name, required, available, unit in rows
    ]


def evaluate(checks: Sequence[IngredientCheck]) -> Availability:
    missing = [
        {
            "name": check.ingredient_name,
            "required": check.required_quantity,
            "available": check.available_quantity,
            "unit": check.unit,
        }
        for check in checks
        if check.is_short
    ]
    return Availability(available=not missing, missing=missing)


def check_availability(db: Session, menu_item_id: int) -> Availability:
    return evaluate(check_ingredients_availability(db, menu_item_id))


def recompute_all_availability(db: Session) -> int:
    """Refresh ``is_available`` of every dish that has a recipe.

    Dishes without recipe lines are skipped, so clearing a recipe leaves the
    last computed flag in place until staff change it by hand. Returns the
    number of dishes whose flag changed.
    """
    rows = db.execute(
        select(MenuItemIngredient.menu_item_id, MenuItemIngredient.quantity, InventoryItem.quantity)
        .join(InventoryItem, MenuItemIngredient.inventory_item_id == InventoryItem.id)
    ).all()
    sellable: dict[int, bool] = defaultdict(lambda: True)
    for menu_item_id, required, available in rows:
        sellable[menu_item_id] = sellable[menu_item_id] and Decimal(available) >= Decimal(required)

    changed = 0
    if sellable:
        for menu_item in db.scalars(select(MenuItem).where(MenuItem.id.in_(list(sellable)))).all():
            if menu_item.is_available != sellable[menu_item.id]:
                menu_item.is_available = sellable[menu_item.id]
                changed += 1
    if changed:
        db.commit()
        change_feed.publish("menu")
    logger.info("[AVAILABILITY] Recomputed %s dishes, %s changed", len(sellable), changed)
    return changed


def low_stock_affecting_menu(db: Session) -> list[dict[str, object]]:
    """Ingredients at or below their minimum that at least one dish depends on."""
    items = db.scalars(
        select(InventoryItem)
        .where(InventoryItem.quantity <= InventoryItem.minimum_quantity)
        .options(selectinload(InventoryItem.recipe_lines).selectinload(MenuItemIngredient.menu_item))
        .order_by(InventoryItem.name.asc(), InventoryItem.id.asc())
    ).all()
    warnings: list[dict[str, object]] = []
    for item in items:
        dishes = sorted({line.menu_item for line in item.recipe_lines}, key=lambda dish: (dish.name, dish.id))
        if not dishes:
            continue
        warnings.append(
            {
                "inventory_item_id": item.id,
                "name": item.name,
                "quantity": item.quantity,
                "minimum_quantity": item.minimum_quantity,
                "unit": item.unit,
                "dishes": [{"id": dish.id, "name": dish.name, "is_available": dish.is_available} for dish in dishes],
            }
        )
    return warnings


def _recompute_on_change(channel: str) -> None:
    if not settings.availability_auto_recompute:
        return
    with db_session.SessionLocal() as db:
        try:
            recompute_all_availability(db)
        except Exception:
            db.rollback()
            logger.exception("[AVAILABILITY] Recompute after %s change failed", channel)


_listener_handles: list[Callable[[], None]] = []


def register_availability_listener(feed: ChangeFeed = change_feed) -> None:
    """Recompute availability whenever stock or recipes change; safe to call repeatedly."""
    if _listener_handles:
        return
    for channel in ("inventory", "recipes"):
        _listener_handles.append(feed.subscribe(channel, _recompute_on_change))


def unregister_availability_listener() -> None:
    while _listener_handles:
        _listener_handles.pop()()
