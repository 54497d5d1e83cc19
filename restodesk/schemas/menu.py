"""Menu, category and recipe API schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from restodesk.schemas.partial import reject_explicit_nulls


class MenuCategoryCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str | None = None
    sort_order: int = 0
    is_active: bool = True


class MenuCategoryUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    sort_order: int | None = None
    is_active: bool | None = None

    @model_validator(mode="after")
    def _no_null_required(self) -> "MenuCategoryUpdate":
        reject_explicit_nulls(self, ("name", "sort_order", "is_active"))
        return self


class MenuCategoryRead(MenuCategoryCreate):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MenuItemCreate(BaseModel):
    """Payload for creating a dish."""

    category_id: int
    name: str = Field(min_length=1)
    description: str | None = None
    price: Decimal = Field(ge=0)
    is_available: bool = True
    preparation_time: str | None = None
    allergens: list[str] = Field(default_factory=list)
    image_url: str | None = None
    is_vegetarian: bool = False
    is_vegan: bool = False
    is_gluten_free: bool = False
    spiciness_level: int = Field(default=0, ge=0, le=3)
    is_weight_based: bool = False
    price_per_kg: Decimal | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _weight_pricing(self) -> "MenuItemCreate":
        if self.is_weight_based and self.price_per_kg is None:
            raise ValueError("price_per_kg is required for weight-based dishes")
        return self


class MenuItemUpdate(BaseModel):
    """Partial dish update; omitted fields keep their value."""

    category_id: int | None = None
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    price: Decimal | None = Field(default=None, ge=0)
    is_available: bool | None = None
    preparation_time: str | None = None
    allergens: list[str] | None = None
    image_url: str | None = None
    is_vegetarian: bool | None = None
    is_vegan: bool | None = None
    is_gluten_free: bool | None = None
    spiciness_level: int | None = Field(default=None, ge=0, le=3)
    is_weight_based: bool | None = None
    price_per_kg: Decimal | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _no_null_required(self) -> "MenuItemUpdate":
        reject_explicit_nulls(
            self,
            (
                "category_id",
                "name",
                "price",
                "is_available",
                "allergens",
                "is_vegetarian",
                "is_vegan",
                "is_gluten_free",
                "spiciness_level",
                "is_weight_based",
            ),
        )
        return self


class MenuItemRead(BaseModel):
    """Serialized dish."""

    id: int
    category_id: int
    category_name: str | None = None
    name: str
    description: str | None
    price: Decimal
    is_available: bool
    preparation_time: str | None
    allergens: list[str]
    image_url: str | None
    is_vegetarian: bool
    is_vegan: bool
    is_gluten_free: bool
    spiciness_level: int
    is_weight_based: bool
    price_per_kg: Decimal | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RecipeLineWrite(BaseModel):
    inventory_item_id: int
    quantity: Decimal = Field(gt=0)
    unit: str = Field(min_length=1)


class RecipeWrite(BaseModel):
    ingredients: list[RecipeLineWrite]


class IngredientSnapshot(BaseModel):
    id: int
    name: str
    quantity: Decimal
    unit: str

    model_config = ConfigDict(from_attributes=True)


class RecipeLineRead(BaseModel):
    """Recipe line with the ingredient's current stock."""

    menu_item_id: int
    inventory_item_id: int
    quantity: Decimal
    unit: str
    inventory_item: IngredientSnapshot

    model_config = ConfigDict(from_attributes=True)


class IngredientAvailabilityRow(BaseModel):
    ingredient_name: str
    required_quantity: Decimal
    available_quantity: Decimal
    unit: str


class MissingIngredient(BaseModel):
    name: str
    required: Decimal
    available: Decimal
    unit: str


class MenuItemAvailability(BaseModel):
    available: bool
    missing: list[MissingIngredient]


class DependentDish(BaseModel):
    id: int
    name: str
    is_available: bool


class LowStockWarning(BaseModel):
    """Low-stock ingredient together with the dishes that use it."""

    inventory_item_id: int
    name: str
    quantity: Decimal
    minimum_quantity: Decimal
    unit: str
    dishes: list[DependentDish]


class AvailabilityRecomputeResponse(BaseModel):
    updated: int
