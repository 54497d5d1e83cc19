"""Menu, recipe and availability endpoints."""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from restodesk.auth import INVENTORY_READ, MENU_MANAGE, MENU_READ, require_capability
from restodesk.db.session import get_db
from restodesk.models.user import Profile
from restodesk.schemas.menu import (
    AvailabilityRecomputeResponse,
    IngredientAvailabilityRow,
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
from restodesk.services import availability_service, menu_service
from restodesk.services.live_cache import collection_cache

router: APIRouter = APIRouter()


@router.get("/categories", response_model=list[MenuCategoryRead])
def list_categories(
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(MENU_READ)),
) -> list[MenuCategoryRead]:
    return collection_cache.fetch(
        "menu_categories",
        lambda: [MenuCategoryRead.model_validate(category) for category in menu_service.list_categories(db)],
    )


@router.post("/categories", response_model=MenuCategoryRead, status_code=status.HTTP_201_CREATED)
def create_category(
    payload: MenuCategoryCreate,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(MENU_MANAGE)),
) -> MenuCategoryRead:
    return MenuCategoryRead.model_validate(menu_service.create_category(db, **payload.model_dump()))


@router.patch("/categories/{category_id}", response_model=MenuCategoryRead)
def update_category(
    category_id: int,
    payload: MenuCategoryUpdate,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(MENU_MANAGE)),
) -> MenuCategoryRead:
    category = menu_service.get_category(db, category_id)
    updated = menu_service.update_category(db, category, payload.model_dump(exclude_unset=True))
    return MenuCategoryRead.model_validate(updated)


@router.delete("/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: int,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(MENU_MANAGE)),
) -> Response:
    menu_service.delete_category(db, menu_service.get_category(db, category_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/items", response_model=list[MenuItemRead])
def list_menu_items(
    category_id: int | None = Query(default=None),
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(MENU_READ)),
) -> list[MenuItemRead]:
    if category_id is not None:
        return [MenuItemRead.model_validate(item) for item in menu_service.list_menu_items(db, category_id=category_id)]
    return collection_cache.fetch(
        "menu_items",
        lambda: [MenuItemRead.model_validate(item) for item in menu_service.list_menu_items(db)],
    )


@router.post("/items", response_model=MenuItemRead, status_code=status.HTTP_201_CREATED)
def create_menu_item(
    payload: MenuItemCreate,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(MENU_MANAGE)),
) -> MenuItemRead:
    return MenuItemRead.model_validate(menu_service.create_menu_item(db, payload.model_dump()))


@router.get("/items/{menu_item_id}", response_model=MenuItemRead)
def get_menu_item(
    menu_item_id: int,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(MENU_READ)),
) -> MenuItemRead:
    return MenuItemRead.model_validate(menu_service.get_menu_item(db, menu_item_id))


@router.patch("/items/{menu_item_id}", response_model=MenuItemRead)
def update_menu_item(
    menu_item_id: int,
    payload: MenuItemUpdate,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(MENU_MANAGE)),
) -> MenuItemRead:
    menu_item = menu_service.get_menu_item(db, menu_item_id)
    updated = menu_service.update_menu_item(db, menu_item, payload.model_dump(exclude_unset=True))
    return MenuItemRead.model_validate(updated)


@router.delete("/items/{menu_item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_menu_item(
    menu_item_id: int,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(MENU_MANAGE)),
) -> Response:
    menu_service.delete_menu_item(db, menu_service.get_menu_item(db, menu_item_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/items/{menu_item_id}/recipe", response_model=list[RecipeLineRead])
def get_recipe(
    menu_item_id: int,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(MENU_READ)),
) -> list[RecipeLineRead]:
    return [RecipeLineRead.model_validate(line) for line in availability_service.get_recipe(db, menu_item_id)]


@router.put("/items/{menu_item_id}/recipe", response_model=list[RecipeLineRead])
def set_recipe(
    menu_item_id: int,
    payload: RecipeWrite,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(MENU_MANAGE)),
) -> list[RecipeLineRead]:
    """Replace the dish's recipe with the given ingredient list."""
    lines = availability_service.set_recipe(db, menu_item_id, payload.ingredients)
    return [RecipeLineRead.model_validate(line) for line in lines]


@router.get("/items/{menu_item_id}/ingredients-check", response_model=list[IngredientAvailabilityRow])
def check_ingredients(
    menu_item_id: int,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(MENU_READ)),
) -> list[IngredientAvailabilityRow]:
    checks = availability_service.check_ingredients_availability(db, menu_item_id)
    return [
        IngredientAvailabilityRow(
            ingredient_name=check.ingredient_name,
            required_quantity=check.required_quantity,
            available_quantity=check.available_quantity,
            unit=check.unit,
        )
        for check in checks
    ]


@router.get("/items/{menu_item_id}/availability", response_model=MenuItemAvailability)
def check_availability(
    menu_item_id: int,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(MENU_READ)),
) -> MenuItemAvailability:
    result = availability_service.check_availability(db, menu_item_id)
    return MenuItemAvailability(available=result.available, missing=result.missing)


@router.post("/availability/recompute", response_model=AvailabilityRecomputeResponse)
def recompute_availability(
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(MENU_MANAGE)),
) -> AvailabilityRecomputeResponse:
    return AvailabilityRecomputeResponse(updated=availability_service.recompute_all_availability(db))


@router.get("/low-stock", response_model=list[LowStockWarning])
def low_stock_affecting_menu(
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(INVENTORY_READ)),
) -> list[LowStockWarning]:
    return [LowStockWarning.model_validate(warning) for warning in availability_service.low_stock_affecting_menu(db)]
