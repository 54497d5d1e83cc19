from fastapi.testclient import TestClient

from restodesk.services.change_feed import ChangeFeed
from restodesk.services.live_cache import VersionedCache


def test_stale_refetch_is_discarded() -> None:
    cache = VersionedCache()
    slow = cache.begin_refresh("tables")
    fast = cache.begin_refresh("tables")

    assert cache.apply("tables", fast, ["fresh"])
    assert not cache.apply("tables", slow, ["stale"])
    assert cache.get("tables") == (True, ["fresh"])
    assert cache.applied_stamp("tables") == fast


def test_publish_invalidates_bound_collections() -> None:
    feed = ChangeFeed()
    cache = VersionedCache()
    cache.bind(feed)
    cache.apply("menu_items", cache.begin_refresh("menu_items"), ["pierogi"])
    cache.apply("tables", cache.begin_refresh("tables"), [1])

    feed.publish("menu")

    assert cache.get("menu_items") == (False, None)
    assert cache.get("tables") == (True, [1])


def test_refetch_started_before_invalidation_is_not_served() -> None:
    feed = ChangeFeed()
    cache = VersionedCache()
    cache.bind(feed)
    stamp = cache.begin_refresh("inventory_items")

    feed.publish("inventory")

    assert cache.apply("inventory_items", stamp, ["old"])
    assert cache.get("inventory_items") == (False, None)

    loads: list[str] = []
    assert cache.fetch("inventory_items", lambda: loads.append("db") or ["new"]) == ["new"]
    assert cache.fetch("inventory_items", lambda: loads.append("db") or ["newer"]) == ["new"]
    assert loads == ["db"]


def test_change_feed_versions_and_listeners() -> None:
    feed = ChangeFeed()
    seen: list[str] = []

    def broken(channel: str) -> None:
        raise RuntimeError("listener failure")

    feed.subscribe("orders", broken)
    unsubscribe = feed.subscribe("orders", seen.append)

    assert feed.publish("orders") == 1
    assert feed.publish("orders") == 2
    unsubscribe()
    feed.publish("orders")

    assert seen == ["orders", "orders"]
    assert feed.version("orders") == 3
    assert feed.versions()["tables"] == 0


def test_changes_endpoint_reports_channel_versions(client: TestClient, admin_headers) -> None:
    before = client.get("/api/v1/changes", headers=admin_headers).json()["versions"]

    client.post("/api/v1/tables", json={"number": 1, "capacity": 2}, headers=admin_headers)

    after = client.get("/api/v1/changes", headers=admin_headers).json()["versions"]
    assert after["tables"] == before["tables"] + 1
    assert after["orders"] == before["orders"]
    assert client.get("/api/v1/changes").status_code in {401, 403}
