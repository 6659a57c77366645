from storefront.store import SAMPLE_REVIEWS, SqlStore


def _order(order_id, date, total=10.0):
    return {"id": order_id, "email": "a@b.c", "items": "1 x Sauce", "total": total, "date": date}


def test_init_creates_tables_and_seeds(store):
    assert store.count_reviews() == len(SAMPLE_REVIEWS)
    texts = [r["text"] for r in store.list_reviews()]
    assert texts == SAMPLE_REVIEWS
    assert store.count_orders() == 0


def test_seed_is_idempotent_across_restarts(tmp_path):
    path = tmp_path / "shop.db"
    first = SqlStore(path)
    assert first.init() == len(SAMPLE_REVIEWS)
    first.insert_review("extra")
    first.dispose()

    second = SqlStore(path)
    assert second.init() == 0
    assert second.count_reviews() == len(SAMPLE_REVIEWS) + 1
    second.dispose()


def test_seed_skipped_when_table_has_user_reviews(tmp_path):
    s = SqlStore(tmp_path / "shop.db")
    s.init(samples=[])
    s.insert_review("only one")
    assert s.seed_reviews(SAMPLE_REVIEWS) == 0
    assert s.count_reviews() == 1
    s.dispose()


def test_insert_order_is_idempotent(store):
    assert store.insert_order(_order("cs_1", "2024-01-01T00:00:00.000Z", total=12.5)) is True
    assert store.insert_order(_order("cs_1", "2024-02-01T00:00:00.000Z", total=99.0)) is False

    assert store.count_orders() == 1
    # la première livraison est conservée
    assert store.get_order("cs_1") == _order("cs_1", "2024-01-01T00:00:00.000Z", total=12.5)


def test_insert_order_fills_missing_date(store):
    store.insert_order({"id": "cs_2", "email": "x@y.z", "items": "", "total": 0.0})
    assert store.get_order("cs_2")["date"].endswith("Z")


def test_get_order_absent_returns_none(store):
    assert store.get_order("cs_missing") is None


def test_list_orders_by_date_desc(store):
    store.insert_order(_order("cs_old", "2024-01-01T00:00:00.000Z"))
    store.insert_order(_order("cs_new", "2024-03-01T00:00:00.000Z"))
    store.insert_order(_order("cs_mid", "2024-02-01T00:00:00.000Z"))
    assert [o["id"] for o in store.list_orders()] == ["cs_new", "cs_mid", "cs_old"]


def test_insert_review_assigns_increasing_ids(store):
    a = store.insert_review("first")
    b = store.insert_review("second")
    assert b["id"] > a["id"]
    assert a["text"] == "first"
    assert a["date"].endswith("Z")
    assert store.count_reviews() == len(SAMPLE_REVIEWS) + 2
