"""Application models package."""

from restodesk.models.inventory import InventoryItem, InventoryMovement
from restodesk.models.menu import MenuCategory, MenuItem, MenuItemIngredient
from restodesk.models.order import Order, OrderItem
from restodesk.models.reservation import Reservation
from restodesk.models.table import DiningTable
from restodesk.models.user import Profile, User

__all__ = [
    "DiningTable", "Order", "OrderItem", "MenuCategory", "MenuItem", "MenuItemIngredient",
    "InventoryItem", "InventoryMovement", "Reservation", "User", "Profile",
]
