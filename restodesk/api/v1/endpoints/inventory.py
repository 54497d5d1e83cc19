"""Inventory and stock movement endpoints."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from restodesk.auth import INVENTORY_MANAGE, INVENTORY_READ, require_capability
from restodesk.db.session import get_db
from restodesk.models.user import Profile
from restodesk.schemas.inventory import (
    InventoryItemCreate,
    InventoryItemRead,
    InventoryItemUpdate,
    InventoryMovementCreate,
    InventoryMovementRead,
)
from restodesk.services import inventory_service
from restodesk.services.live_cache import collection_cache

router: APIRouter = APIRouter()


@router.get("/items", response_model=list[InventoryItemRead])
def list_inventory_items(
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(INVENTORY_READ)),
) -> list[InventoryItemRead]:
    return collection_cache.fetch(
        "inventory_items",
        lambda: [InventoryItemRead.model_validate(item) for item in inventory_service.list_inventory_items(db)],
    )


@router.post("/items", response_model=InventoryItemRead, status_code=status.HTTP_201_CREATED)
def create_inventory_item(
    payload: InventoryItemCreate,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(INVENTORY_MANAGE)),
) -> InventoryItemRead:
    return InventoryItemRead.model_validate(inventory_service.create_inventory_item(db, **payload.model_dump()))


@router.patch("/items/{item_id}", response_model=InventoryItemRead)
def update_inventory_item(
    item_id: int,
    payload: InventoryItemUpdate,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(INVENTORY_MANAGE)),
) -> InventoryItemRead:
    item = inventory_service.get_inventory_item(db, item_id)
    updated = inventory_service.update_inventory_item(db, item, payload.model_dump(exclude_unset=True))
    return InventoryItemRead.model_validate(updated)


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_inventory_item(
    item_id: int,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(INVENTORY_MANAGE)),
) -> Response:
    inventory_service.delete_inventory_item(db, inventory_service.get_inventory_item(db, item_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/items/{item_id}/movements", response_model=InventoryMovementRead, status_code=status.HTTP_201_CREATED)
def add_movement(
    item_id: int,
    payload: InventoryMovementCreate,
    db: Session = Depends(get_db),
    profile: Profile = Depends(require_capability(INVENTORY_MANAGE)),
) -> InventoryMovementRead:
    """Record a stock movement and apply it to the item's quantity."""
    movement = inventory_service.add_movement(
        db,
        item_id=item_id,
        movement_type=payload.type,
        quantity=payload.quantity,
        created_by=profile.user,
        notes=payload.notes,
    )
    return InventoryMovementRead.model_validate(movement)


@router.get("/items/{item_id}/movements", response_model=list[InventoryMovementRead])
def list_movements(
    item_id: int,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(INVENTORY_READ)),
) -> list[InventoryMovementRead]:
    return [InventoryMovementRead.model_validate(movement) for movement in inventory_service.list_movements(db, item_id)]
