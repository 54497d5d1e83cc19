"""Inventory API schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from restodesk.schemas.partial import reject_explicit_nulls


class InventoryItemCreate(BaseModel):
    name: str = Field(min_length=1)
    quantity: Decimal = Field(default=Decimal("0"), ge=0)
    unit: str = Field(min_length=1)
    minimum_quantity: Decimal = Field(default=Decimal("0"), ge=0)


class InventoryItemUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    quantity: Decimal | None = Field(default=None, ge=0)
    unit: str | None = Field(default=None, min_length=1)
    minimum_quantity: Decimal | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _no_null_required(self) -> "InventoryItemUpdate":
        reject_explicit_nulls(self, ("name", "quantity", "unit", "minimum_quantity"))
        return self


class InventoryItemRead(BaseModel):
    id: int
    name: str
    quantity: Decimal
    unit: str
    minimum_quantity: Decimal
    is_low_stock: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class InventoryMovementCreate(BaseModel):
    type: Literal["in", "out"]
    quantity: Decimal = Field(gt=0)
    notes: str | None = None


class InventoryMovementRead(BaseModel):
    id: int
    inventory_item_id: int
    type: str
    quantity: Decimal
    notes: str | None
    created_by: int | None
    creator_name: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
