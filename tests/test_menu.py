from decimal import Decimal

from fastapi.testclient import TestClient


def test_category_and_item_crud(client: TestClient, admin_headers, waiter_headers) -> None:
    drinks = client.post("/api/v1/menu/categories", json={"name": "Drinks", "sort_order": 2}, headers=admin_headers)
    mains = client.post("/api/v1/menu/categories", json={"name": "Mains", "sort_order": 1}, headers=admin_headers)
    assert drinks.status_code == 201

    categories = client.get("/api/v1/menu/categories", headers=waiter_headers).json()
    assert [row["name"] for row in categories] == ["Mains", "Drinks"]

    created = client.post(
        "/api/v1/menu/items",
        json={
            "category_id": mains.json()["id"],
            "name": "Bigos",
            "price": "18.00",
            "allergens": ["celery"],
            "spiciness_level": 2,
        },
        headers=admin_headers,
    )
    assert created.status_code == 201
    dish = created.json()
    assert dish["category_name"] == "Mains"
    assert dish["allergens"] == ["celery"]

    updated = client.patch(f"/api/v1/menu/items/{dish['id']}", json={"price": "19.50"}, headers=admin_headers)
    assert Decimal(updated.json()["price"]) == Decimal("19.50")
    assert updated.json()["name"] == "Bigos"

    by_category = client.get(
        "/api/v1/menu/items", params={"category_id": drinks.json()["id"]}, headers=waiter_headers
    ).json()
    assert by_category == []

    assert client.patch(f"/api/v1/menu/items/{dish['id']}", json={"price": "1"}, headers=waiter_headers).status_code == 403
    assert client.delete(f"/api/v1/menu/items/{dish['id']}", headers=admin_headers).status_code == 204
    assert client.get(f"/api/v1/menu/items/{dish['id']}", headers=admin_headers).status_code == 404


def test_menu_item_validation(client: TestClient, admin_headers) -> None:
    category = client.post("/api/v1/menu/categories", json={"name": "Fish"}, headers=admin_headers).json()

    too_spicy = client.post(
        "/api/v1/menu/items",
        json={"category_id": category["id"], "name": "Curry", "price": "20", "spiciness_level": 4},
        headers=admin_headers,
    )
    assert too_spicy.status_code == 422

    no_kg_price = client.post(
        "/api/v1/menu/items",
        json={"category_id": category["id"], "name": "Trout", "price": "0", "is_weight_based": True},
        headers=admin_headers,
    )
    assert no_kg_price.status_code == 422

    unknown_category = client.post(
        "/api/v1/menu/items",
        json={"category_id": 999, "name": "Ghost", "price": "1"},
        headers=admin_headers,
    )
    assert unknown_category.status_code == 404

    dish = client.post(
        "/api/v1/menu/items",
        json={"category_id": category["id"], "name": "Carp", "price": "30"},
        headers=admin_headers,
    ).json()
    switched = client.patch(f"/api/v1/menu/items/{dish['id']}", json={"is_weight_based": True}, headers=admin_headers)
    assert switched.status_code == 400


def test_deleting_category_removes_its_dishes(client: TestClient, admin_headers) -> None:
    category = client.post("/api/v1/menu/categories", json={"name": "Desserts"}, headers=admin_headers).json()
    client.post(
        "/api/v1/menu/items",
        json={"category_id": category["id"], "name": "Sernik", "price": "12"},
        headers=admin_headers,
    )
    assert len(client.get("/api/v1/menu/items", headers=admin_headers).json()) == 1

    assert client.delete(f"/api/v1/menu/categories/{category['id']}", headers=admin_headers).status_code == 204
    assert client.get("/api/v1/menu/items", headers=admin_headers).json() == []


def test_partial_updates_reject_null_for_required_fields(client: TestClient, admin_headers) -> None:
    category = client.post("/api/v1/menu/categories", json={"name": "Soups"}, headers=admin_headers).json()
    dish = client.post(
        "/api/v1/menu/items",
        json={"category_id": category["id"], "name": "Rosol", "price": "9", "description": "broth"},
        headers=admin_headers,
    ).json()

    for payload in ({"name": None}, {"price": None}, {"allergens": None}, {"is_available": None}):
        response = client.patch(f"/api/v1/menu/items/{dish['id']}", json=payload, headers=admin_headers)
        assert response.status_code == 422, payload

    null_category = client.patch(f"/api/v1/menu/categories/{category['id']}", json={"name": None}, headers=admin_headers)
    assert null_category.status_code == 422

    cleared = client.patch(f"/api/v1/menu/items/{dish['id']}", json={"description": None}, headers=admin_headers)
    assert cleared.status_code == 200
    assert cleared.json()["description"] is None
    assert cleared.json()["name"] == "Rosol"
