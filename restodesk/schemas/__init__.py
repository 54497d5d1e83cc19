"""Schema exports."""

from restodesk.schemas.auth import LoginRequest, ProfileResponse, SignUpRequest, TokenResponse, WaiterCreate, WaiterRead
from restodesk.schemas.inventory import (
    InventoryItemCreate,
    InventoryItemRead,
    InventoryItemUpdate,
    InventoryMovementCreate,
    InventoryMovementRead,
)
from restodesk.schemas.menu import (
    LowStockWarning,
    MenuCategoryCreate,
    MenuCategoryRead,
    MenuCategoryUpdate,
    MenuItemAvailability,
    MenuItemCreate,
    MenuItemRead,
    MenuItemUpdate,
    RecipeLineRead,
    RecipeWrite,
)
from restodesk.schemas.order import OrderCreate, OrderItemCreate, OrderItemRead, OrderItemsAppend, OrderRead
from restodesk.schemas.reservation import ReservationCreate, ReservationRead, ReservationUpdate
from restodesk.schemas.table import TableCreate, TableMergeRequest, TableRead, TableStatusUpdate, TableUpdate

__all__ = [
    "LoginRequest",
    "ProfileResponse",
    "SignUpRequest",
    "TokenResponse",
    "WaiterCreate",
    "WaiterRead",
    "InventoryItemCreate",
    "InventoryItemRead",
    "InventoryItemUpdate",
    "InventoryMovementCreate",
    "InventoryMovementRead",
    "LowStockWarning",
    "MenuCategoryCreate",
    "MenuCategoryRead",
    "MenuCategoryUpdate",
    "MenuItemAvailability",
    "MenuItemCreate",
    "MenuItemRead",
    "MenuItemUpdate",
    "RecipeLineRead",
    "RecipeWrite",
    "OrderCreate",
    "OrderItemCreate",
    "OrderItemRead",
    "OrderItemsAppend",
    "OrderRead",
    "ReservationCreate",
    "ReservationRead",
    "ReservationUpdate",
    "TableCreate",
    "TableMergeRequest",
    "TableRead",
    "TableStatusUpdate",
    "TableUpdate",
]
