import bcrypt

from storefront import config
from storefront.store import StoreError


def _seed_orders(store):
    store.insert_order({"id": "cs_a", "email": "a@x.io", "items": "1 x A", "total": 1.0, "date": "2024-01-01T10:00:00.000Z"})
    store.insert_order({"id": "cs_c", "email": "c@x.io", "items": "3 x C", "total": 3.0, "date": "2024-03-01T10:00:00.000Z"})
    store.insert_order({"id": "cs_b", "email": "b@x.io", "items": "2 x B", "total": 2.0, "date": "2024-02-01T10:00:00.000Z"})


def test_orders_requires_bearer_secret(client, store):
    _seed_orders(store)
    for headers in ({}, {"Authorization": "Bearer nope"}, {"Authorization": "Bearer "}):
        res = client.get("/orders", headers=headers)
        assert res.status_code == 401
        assert res.json() == {"error": "Unauthorized"}


def test_orders_listed_by_date_desc(client, store, admin_headers):
    _seed_orders(store)
    res = client.get("/orders", headers=admin_headers)
    assert res.status_code == 200
    assert [o["id"] for o in res.json()] == ["cs_c", "cs_b", "cs_a"]


def test_orders_with_hashed_secret(client, store, monkeypatch):
    hashed = bcrypt.hashpw(b"from-hash", bcrypt.gensalt(rounds=4)).decode("utf-8")
    monkeypatch.setattr(config, "ADMIN_SECRET_HASH", hashed)
    _seed_orders(store)
    assert client.get("/orders", headers={"Authorization": "Bearer from-hash"}).status_code == 200


def test_orders_store_failure_is_500(client, store, admin_headers, monkeypatch):
    def _broken():
        raise StoreError("boom")

    monkeypatch.setattr(store, "list_orders", _broken)
    res = client.get("/orders", headers=admin_headers)
    assert res.status_code == 500
    assert res.json() == {"error": "Failed to fetch orders"}


def test_get_order_not_found(client):
    res = client.get("/order/cs_never")
    assert res.status_code == 404
    assert res.json() == {"error": "Order not found"}


def test_get_order_returns_stored_fields(client, store):
    _seed_orders(store)
    res = client.get("/order/cs_b")
    assert res.status_code == 200
    assert res.json() == {
        "id": "cs_b",
        "email": "b@x.io",
        "items": "2 x B",
        "total": 2.0,
        "date": "2024-02-01T10:00:00.000Z",
    }


def test_ingested_order_is_readable(client, post_webhook, make_event, line_items, admin_headers):
    post_webhook(make_event(session_id="cs_flow", amount_total=1999))
    order = client.get("/order/cs_flow").json()
    assert order["total"] == 19.99
    assert client.get("/orders", headers=admin_headers).json() == [order]
