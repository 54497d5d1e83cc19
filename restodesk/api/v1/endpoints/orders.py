"""Order endpoints."""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from restodesk.auth import ORDERS_DELETE, ORDERS_OPERATE, require_capability
from restodesk.db.session import get_db
from restodesk.models.order import Order
from restodesk.models.user import Profile
from restodesk.schemas.order import (
    OrderCreate,
    OrderItemRead,
    OrderItemsAppend,
    OrderItemStatusUpdate,
    OrderRead,
    OrderStatus,
    OrderStatusUpdate,
)
from restodesk.services import order_service

router: APIRouter = APIRouter()


def _serialize_order(order: Order) -> OrderRead:
    return OrderRead(
        id=order.id,
        table_id=order.table_id,
        table_number=order.table.number if order.table is not None else None,
        waiter_id=order.waiter_id,
        parent_order_id=order.parent_order_id,
        status=order.status,
        total_amount=order.total_amount,
        display_total=order_service.display_total(order),
        notes=order.notes,
        created_at=order.created_at,
        updated_at=order.updated_at,
        items=[OrderItemRead.model_validate(item) for item in order.items],
    )


@router.get("", response_model=list[OrderRead])
def list_orders(
    status_filter: OrderStatus | None = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(ORDERS_OPERATE)),
) -> list[OrderRead]:
    return [_serialize_order(order) for order in order_service.list_orders(db, status=status_filter)]


@router.post("", response_model=OrderRead, status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreate,
    db: Session = Depends(get_db),
    profile: Profile = Depends(require_capability(ORDERS_OPERATE)),
) -> OrderRead:
    """Open an order for a table with its first lines."""
    order = order_service.create_order(
        db,
        table_id=payload.table_id,
        waiter=profile.user,
        items=payload.items,
        notes=payload.notes,
        create_umbrella=payload.create_umbrella,
    )
    return _serialize_order(order)


@router.get("/{order_id}", response_model=OrderRead)
def get_order(
    order_id: int,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(ORDERS_OPERATE)),
) -> OrderRead:
    return _serialize_order(order_service.get_order(db, order_id))


@router.post("/{order_id}/items", response_model=OrderRead)
def add_order_items(
    order_id: int,
    payload: OrderItemsAppend,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(ORDERS_OPERATE)),
) -> OrderRead:
    order = order_service.get_order(db, order_id)
    return _serialize_order(order_service.add_items(db, order, payload.items))


@router.put("/{order_id}/status", response_model=OrderRead)
def set_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(ORDERS_OPERATE)),
) -> OrderRead:
    order = order_service.get_order(db, order_id)
    return _serialize_order(order_service.set_order_status(db, order, payload.status))


@router.post("/{order_id}/close", response_model=OrderRead)
def close_bill(
    order_id: int,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(ORDERS_OPERATE)),
) -> OrderRead:
    order = order_service.get_order(db, order_id)
    return _serialize_order(order_service.close_bill(db, order))


@router.put("/items/{item_id}/status", response_model=OrderItemRead)
def set_order_item_status(
    item_id: int,
    payload: OrderItemStatusUpdate,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(ORDERS_OPERATE)),
) -> OrderItemRead:
    item = order_service.get_order_item(db, item_id)
    return OrderItemRead.model_validate(order_service.set_item_status(db, item, payload.status))


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(
    order_id: int,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(ORDERS_DELETE)),
) -> Response:
    order_service.delete_order(db, order_service.get_order(db, order_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
