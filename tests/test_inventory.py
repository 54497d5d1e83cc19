from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from restodesk.services import inventory_service
from restodesk.services.errors import NotFoundError, ValidationError


def _flour(db: Session, quantity: str = "10", minimum: str = "2"):
    return inventory_service.create_inventory_item(
        db, name="Flour", quantity=Decimal(quantity), unit="kg", minimum_quantity=Decimal(minimum)
    )


def test_low_stock_includes_threshold(db: Session) -> None:
    item = _flour(db, quantity="2", minimum="2")
    assert item.is_low_stock

    inventory_service.update_inventory_item(db, item, {"quantity": Decimal("2.5")})
    assert not item.is_low_stock


def test_repeated_in_movements_accumulate(db: Session) -> None:
    item = _flour(db)

    inventory_service.add_movement(db, item_id=item.id, movement_type="in", quantity=Decimal("5"), created_by=None)
    inventory_service.add_movement(db, item_id=item.id, movement_type="in", quantity=Decimal("5"), created_by=None)

    db.refresh(item)
    assert Decimal(item.quantity) == Decimal("20")
    assert len(inventory_service.list_movements(db, item.id)) == 2


def test_out_movement_subtracts_and_cannot_go_negative(db: Session) -> None:
    item = _flour(db)

    inventory_service.add_movement(db, item_id=item.id, movement_type="out", quantity=Decimal("3.5"), created_by=None)
    db.refresh(item)
    assert Decimal(item.quantity) == Decimal("6.5")

    with pytest.raises(ValidationError):
        inventory_service.add_movement(db, item_id=item.id, movement_type="out", quantity=Decimal("7"), created_by=None)

    db.refresh(item)
    assert Decimal(item.quantity) == Decimal("6.5")
    assert len(inventory_service.list_movements(db, item.id)) == 1


def test_movement_validation(db: Session) -> None:
    item = _flour(db)

    with pytest.raises(ValidationError):
        inventory_service.add_movement(db, item_id=item.id, movement_type="lost", quantity=Decimal("1"), created_by=None)
    with pytest.raises(ValidationError):
        inventory_service.add_movement(db, item_id=item.id, movement_type="in", quantity=Decimal("0"), created_by=None)
    with pytest.raises(NotFoundError):
        inventory_service.add_movement(db, item_id=999, movement_type="in", quantity=Decimal("1"), created_by=None)


def test_update_inventory_quantity_is_atomic_delta(db: Session) -> None:
    item = _flour(db)

    inventory_service.update_inventory_quantity(db, item.id, Decimal("-10"))
    db.commit()
    db.refresh(item)
    assert Decimal(item.quantity) == Decimal("0")

    with pytest.raises(ValidationError):
        inventory_service.update_inventory_quantity(db, item.id, Decimal("-0.001"))
    with pytest.raises(NotFoundError):
        inventory_service.update_inventory_quantity(db, 999, Decimal("1"))


def test_inventory_endpoints_record_creator(client: TestClient, admin_headers, waiter_headers) -> None:
    created = client.post(
        "/api/v1/inventory/items",
        json={"name": "Butter", "quantity": "1", "unit": "kg", "minimum_quantity": "1"},
        headers=admin_headers,
    )
    assert created.status_code == 201
    item_id = created.json()["id"]
    assert created.json()["is_low_stock"] is True

    movement = client.post(
        f"/api/v1/inventory/items/{item_id}/movements",
        json={"type": "in", "quantity": "4", "notes": "delivery"},
        headers=admin_headers,
    )
    assert movement.status_code == 201

    listed = client.get("/api/v1/inventory/items", headers=waiter_headers)
    assert Decimal(listed.json()[0]["quantity"]) == Decimal("5")
    assert listed.json()[0]["is_low_stock"] is False

    ledger = client.get(f"/api/v1/inventory/items/{item_id}/movements", headers=waiter_headers)
    assert ledger.json()[0]["creator_name"] == "Administrator"
    assert ledger.json()[0]["notes"] == "delivery"

    too_much = client.post(
        f"/api/v1/inventory/items/{item_id}/movements",
        json={"type": "out", "quantity": "50"},
        headers=admin_headers,
    )
    assert too_much.status_code == 400

    forbidden = client.post(
        f"/api/v1/inventory/items/{item_id}/movements",
        json={"type": "out", "quantity": "1"},
        headers=waiter_headers,
    )
    assert forbidden.status_code == 403


def test_inventory_patch_rejects_null_quantity(client: TestClient, admin_headers) -> None:
    item = client.post(
        "/api/v1/inventory/items",
        json={"name": "Salt", "quantity": "3", "unit": "kg", "minimum_quantity": "1"},
        headers=admin_headers,
    ).json()

    for payload in ({"quantity": None}, {"name": None}, {"unit": None}, {"minimum_quantity": None}):
        response = client.patch(f"/api/v1/inventory/items/{item['id']}", json=payload, headers=admin_headers)
        assert response.status_code == 422, payload

    renamed = client.patch(f"/api/v1/inventory/items/{item['id']}", json={"name": "Sea salt"}, headers=admin_headers)
    assert renamed.status_code == 200
    assert Decimal(renamed.json()["quantity"]) == Decimal("3")
