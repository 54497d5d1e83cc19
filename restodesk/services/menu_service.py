"""Menu category and dish management."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from restodesk.models.menu import MenuCategory, MenuItem
from restodesk.services.change_feed import change_feed
from restodesk.services.errors import NotFoundError, ValidationError
from restodesk.utils.time import utcnow

logger = logging.getLogger(__name__)


def list_categories(db: Session) -> list[MenuCategory]:
    """Return categories in their explicit sort order."""
    return list(db.scalars(select(MenuCategory).order_by(MenuCategory.sort_order.asc(), MenuCategory.id.asc())).all())


def get_category(db: Session, category_id: int) -> MenuCategory:
    category = db.get(MenuCategory, category_id)
    if category is None:
        raise NotFoundError(f"Menu category {category_id} not found")
    return category


def create_category(db: Session, *, name: str, description: str | None, sort_order: int, is_active: bool) -> MenuCategory:
    category = MenuCategory(name=name, description=description, sort_order=sort_order, is_active=is_active)
    db.add(category)
    db.commit()
    db.refresh(category)
    change_feed.publish("menu")
    return category


def update_category(db: Session, category: MenuCategory, changes: dict[str, Any]) -> MenuCategory:
    for field, value in changes.items():
        setattr(category, field, value)
    category.updated_at = utcnow()
    db.commit()
    db.refresh(category)
    change_feed.publish("menu")
    return category


def delete_category(db: Session, category: MenuCategory) -> None:
    """Delete a category together with its dishes."""
    db.delete(category)
    db.commit()
    change_feed.publish("menu")


def list_menu_items(db: Session, category_id: int | None = None) -> list[MenuItem]:
    """Return dishes ordered by name, optionally for one category."""
    query = select(MenuItem).options(selectinload(MenuItem.category))
    if category_id is not None:
        query = query.where(MenuItem.category_id == category_id)
    return list(db.scalars(query.order_by(MenuItem.name.asc(), MenuItem.id.asc())).all())


def get_menu_item(db: Session, menu_item_id: int) -> MenuItem:
    menu_item = db.get(MenuItem, menu_item_id)
    if menu_item is None:
        raise NotFoundError(f"Menu item {menu_item_id} not found")
    return menu_item


def _check_weight_pricing(is_weight_based: bool, price_per_kg: object) -> None:
    if is_weight_based and price_per_kg is None:
        raise ValidationError("price_per_kg is required for weight-based dishes")


def create_menu_item(db: Session, fields: dict[str, Any]) -> MenuItem:
    get_category(db, fields["category_id"])
    _check_weight_pricing(fields.get("is_weight_based", False), fields.get("price_per_kg"))
    menu_item = MenuItem(**fields)
    db.add(menu_item)
    db.commit()
    db.refresh(menu_item)
    logger.info("[MENU] Created menu item id=%s name=%s", menu_item.id, menu_item.name)
    change_feed.publish("menu")
    return menu_item


def update_menu_item(db: Session, menu_item: MenuItem, changes: dict[str, Any]) -> MenuItem:
    if "category_id" in changes:
        get_category(db, changes["category_id"])
    _check_weight_pricing(
        changes.get("is_weight_based", menu_item.is_weight_based),
        changes.get("price_per_kg", menu_item.price_per_kg),
    )
    for field, value in changes.items():
        setattr(menu_item, field, value)
    menu_item.updated_at = utcnow()
    db.commit()
    db.refresh(menu_item)
    change_feed.publish("menu")
    return menu_item


def delete_menu_item(db: Session, menu_item: MenuItem) -> None:
    """Delete a dish; recipe lines go with it, past order lines keep their snapshot."""
    db.delete(menu_item)
    db.commit()
    change_feed.publish("menu")
