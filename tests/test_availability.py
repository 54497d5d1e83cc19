from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from restodesk.core.config import settings
from restodesk.schemas.menu import RecipeLineWrite
from restodesk.services import availability_service, inventory_service, menu_service
from restodesk.services.errors import NotFoundError, ValidationError


@pytest.fixture
def kitchen(db: Session, monkeypatch: pytest.MonkeyPatch) -> dict:
    monkeypatch.setattr(settings, "availability_auto_recompute", False)
    category = menu_service.create_category(db, name="Mains", description=None, sort_order=1, is_active=True)
    return {
        "pierogi": menu_service.create_menu_item(db, {"category_id": category.id, "name": "Pierogi", "price": Decimal("10")}),
        "tea": menu_service.create_menu_item(db, {"category_id": category.id, "name": "Tea", "price": Decimal("3")}),
        "flour": inventory_service.create_inventory_item(
            db, name="Flour", quantity=Decimal("0.1"), unit="kg", minimum_quantity=Decimal("1")
        ),
        "cheese": inventory_service.create_inventory_item(
            db, name="Cheese", quantity=Decimal("5"), unit="kg", minimum_quantity=Decimal("1")
        ),
    }


def test_shortage_is_reported_per_ingredient(db: Session, kitchen) -> None:
    availability_service.set_recipe(
        db,
        kitchen["pierogi"].id,
        [
            RecipeLineWrite(inventory_item_id=kitchen["flour"].id, quantity=Decimal("0.2"), unit="kg"),
            RecipeLineWrite(inventory_item_id=kitchen["cheese"].id, quantity=Decimal("0.1"), unit="kg"),
        ],
    )

    result = availability_service.check_availability(db, kitchen["pierogi"].id)

    assert result.available is False
    assert len(result.missing) == 1
    missing = result.missing[0]
    assert missing["name"] == "Flour"
    assert missing["required"] == Decimal("0.2")
    assert missing["available"] == Decimal("0.1")
    assert missing["unit"] == "kg"


def test_dish_without_recipe_is_available_and_untouched_by_recompute(db: Session, kitchen) -> None:
    menu_service.update_menu_item(db, kitchen["tea"], {"is_available": False})

    assert availability_service.check_availability(db, kitchen["tea"].id).available is True
    availability_service.recompute_all_availability(db)

    db.refresh(kitchen["tea"])
    assert kitchen["tea"].is_available is False


def test_recompute_follows_stock(db: Session, kitchen) -> None:
    availability_service.set_recipe(
        db,
        kitchen["pierogi"].id,
        [RecipeLineWrite(inventory_item_id=kitchen["flour"].id, quantity=Decimal("0.2"), unit="kg")],
    )

    assert availability_service.recompute_all_availability(db) == 1
    db.refresh(kitchen["pierogi"])
    assert kitchen["pierogi"].is_available is False

    inventory_service.add_movement(
        db, item_id=kitchen["flour"].id, movement_type="in", quantity=Decimal("0.1"), created_by=None
    )
    assert availability_service.recompute_all_availability(db) == 1
    db.refresh(kitchen["pierogi"])
    assert kitchen["pierogi"].is_available is True

    assert availability_service.recompute_all_availability(db) == 0


def test_set_recipe_is_idempotent_and_replaces(db: Session, kitchen) -> None:
    lines = [
        RecipeLineWrite(inventory_item_id=kitchen["flour"].id, quantity=Decimal("0.2"), unit="kg"),
        RecipeLineWrite(inventory_item_id=kitchen["cheese"].id, quantity=Decimal("0.1"), unit="kg"),
    ]

    availability_service.set_recipe(db, kitchen["pierogi"].id, lines)
    again = availability_service.set_recipe(db, kitchen["pierogi"].id, lines)

    assert [(line.inventory_item_id, Decimal(line.quantity)) for line in again] == [
        (kitchen["flour"].id, Decimal("0.2")),
        (kitchen["cheese"].id, Decimal("0.1")),
    ]

    replaced = availability_service.set_recipe(db, kitchen["pierogi"].id, lines[1:])
    assert [line.inventory_item_id for line in replaced] == [kitchen["cheese"].id]

    assert availability_service.set_recipe(db, kitchen["pierogi"].id, []) == []


def test_set_recipe_rejects_duplicates_and_unknown_ingredients(db: Session, kitchen) -> None:
    line = RecipeLineWrite(inventory_item_id=kitchen["flour"].id, quantity=Decimal("0.2"), unit="kg")
    availability_service.set_recipe(db, kitchen["pierogi"].id, [line])

    with pytest.raises(ValidationError):
        availability_service.set_recipe(db, kitchen["pierogi"].id, [line, line])
    with pytest.raises(NotFoundError):
        availability_service.set_recipe(
            db, kitchen["pierogi"].id, [RecipeLineWrite(inventory_item_id=999, quantity=Decimal("1"), unit="kg")]
        )

    assert len(availability_service.get_recipe(db, kitchen["pierogi"].id)) == 1


def test_low_stock_affecting_menu_lists_dependent_dishes(db: Session, kitchen) -> None:
    inventory_service.create_inventory_item(db, name="Salt", quantity=Decimal("0"), unit="kg", minimum_quantity=Decimal("1"))
    availability_service.set_recipe(
        db,
        kitchen["pierogi"].id,
        [
            RecipeLineWrite(inventory_item_id=kitchen["flour"].id, quantity=Decimal("0.2"), unit="kg"),
            RecipeLineWrite(inventory_item_id=kitchen["cheese"].id, quantity=Decimal("0.1"), unit="kg"),
        ],
    )

    warnings = availability_service.low_stock_affecting_menu(db)

    assert [warning["name"] for warning in warnings] == ["Flour"]
    assert warnings[0]["dishes"] == [{"id": kitchen["pierogi"].id, "name": "Pierogi", "is_available": True}]


def test_stock_movement_recomputes_availability_reactively(client: TestClient, admin_headers) -> None:
    category = client.post("/api/v1/menu/categories", json={"name": "Mains"}, headers=admin_headers).json()
    dish = client.post(
        "/api/v1/menu/items",
        json={"category_id": category["id"], "name": "Pierogi", "price": "10.00"},
        headers=admin_headers,
    ).json()
    flour = client.post(
        "/api/v1/inventory/items",
        json={"name": "Flour", "quantity": "1", "unit": "kg", "minimum_quantity": "0.5"},
        headers=admin_headers,
    ).json()

    recipe = client.put(
        f"/api/v1/menu/items/{dish['id']}/recipe",
        json={"ingredients": [{"inventory_item_id": flour["id"], "quantity": "0.8", "unit": "kg"}]},
        headers=admin_headers,
    )
    assert recipe.status_code == 200
    assert recipe.json()[0]["inventory_item"]["name"] == "Flour"

    items = client.get("/api/v1/menu/items", headers=admin_headers).json()
    assert items[0]["is_available"] is True

    client.post(
        f"/api/v1/inventory/items/{flour['id']}/movements",
        json={"type": "out", "quantity": "0.5"},
        headers=admin_headers,
    )

    items = client.get("/api/v1/menu/items", headers=admin_headers).json()
    assert items[0]["is_available"] is False

    check = client.get(f"/api/v1/menu/items/{dish['id']}/availability", headers=admin_headers).json()
    assert check["available"] is False
    assert check["missing"][0]["name"] == "Flour"

    rows = client.get(f"/api/v1/menu/items/{dish['id']}/ingredients-check", headers=admin_headers).json()
    assert Decimal(rows[0]["available_quantity"]) == Decimal("0.5")
    assert Decimal(rows[0]["required_quantity"]) == Decimal("0.8")

    low = client.get("/api/v1/menu/low-stock", headers=admin_headers).json()
    assert low[0]["dishes"] == [{"id": dish["id"], "name": "Pierogi", "is_available": False}]

    table = client.post("/api/v1/tables", json={"number": 1, "capacity": 2}, headers=admin_headers).json()
    order = client.post(
        "/api/v1/orders",
        json={"table_id": table["id"], "items": [{"menu_item_id": dish["id"]}]},
        headers=admin_headers,
    )
    assert order.status_code == 400
    assert "not available" in order.json()["detail"]


def test_manual_recompute_endpoint(client: TestClient, admin_headers, waiter_headers) -> None:
    response = client.post("/api/v1/menu/availability/recompute", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"updated": 0}
    assert client.post("/api/v1/menu/availability/recompute", headers=waiter_headers).status_code == 403


def test_clearing_recipe_keeps_last_computed_flag(db: Session, kitchen) -> None:
    availability_service.set_recipe(
        db,
        kitchen["pierogi"].id,
        [RecipeLineWrite(inventory_item_id=kitchen["flour"].id, quantity=Decimal("0.2"), unit="kg")],
    )
    availability_service.recompute_all_availability(db)

    availability_service.set_recipe(db, kitchen["pierogi"].id, [])

    assert availability_service.recompute_all_availability(db) == 0
    db.refresh(kitchen["pierogi"])
    assert kitchen["pierogi"].is_available is False
    assert availability_service.check_availability(db, kitchen["pierogi"].id).available is True
