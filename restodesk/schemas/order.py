"""Order API schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

OrderStatus = Literal["pending", "preparing", "ready", "served", "paid", "cancelled"]
OrderItemStatus = Literal["pending", "preparing", "ready", "served", "cancelled"]


class OrderItemCreate(BaseModel):
    """Single order line payload."""

    menu_item_id: int
    quantity: int = Field(default=1, ge=1)
    notes: str | None = None
    weight_kg: Decimal | None = Field(default=None, gt=0)


class OrderCreate(BaseModel):
    """Create an order for a table."""

    table_id: int
    notes: str | None = None
    items: list[OrderItemCreate] = Field(min_length=1)
    create_umbrella: bool = False


class OrderItemsAppend(BaseModel):
    items: list[OrderItemCreate] = Field(min_length=1)


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class OrderItemStatusUpdate(BaseModel):
    status: OrderItemStatus


class OrderDishRead(BaseModel):
    id: int
    name: str
    price: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderItemRead(BaseModel):
    """Serialized order line."""

    id: int
    order_id: int
    menu_item_id: int | None
    quantity: int
    notes: str | None
    weight_kg: Decimal | None
    unit_price: Decimal
    status: str
    created_at: datetime
    updated_at: datetime
    menu_item: OrderDishRead | None = None

    model_config = ConfigDict(from_attributes=True)


class OrderRead(BaseModel):
    """Serialized order with its lines and both totals."""

    id: int
    table_id: int
    table_number: int | None = None
    waiter_id: int | None
    parent_order_id: int | None
    status: str
    total_amount: Decimal
    display_total: Decimal
    notes: str | None
    created_at: datetime
    updated_at: datetime
    items: list[OrderItemRead]
