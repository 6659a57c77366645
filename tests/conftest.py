import os

# Avant tout import de l'app: pas de Redis pendant les tests
os.environ["DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS"] = "1"

import hashlib
import hmac
import json
import time
from types import SimpleNamespace
from typing import Any, Dict, Generator, Optional

import pytest
from fastapi.testclient import TestClient
from fastapi_limiter import FastAPILimiter

from storefront import config
from storefront.app_setup.factory import create_app
from storefront.payments import stripe_client
from storefront.store import SqlStore

WEBHOOK_SECRET = "whsec_test_secret"
ADMIN_SECRET = "admin-s3cret"

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)
        elif "/functional/" in nodeid:
            item.add_marker(pytest.mark.functional)

@pytest.fixture(autouse=True)
def _test_config(monkeypatch):
    monkeypatch.setattr(config, "STRIPE_SECRET_KEY", "sk_test_dummy")
    monkeypatch.setattr(config, "STRIPE_WEBHOOK_SECRET", WEBHOOK_SECRET)
    monkeypatch.setattr(config, "STRIPE_LINE_ITEMS_TIMEOUT", 2.0)
    monkeypatch.setattr(config, "ADMIN_PASSWORD", ADMIN_SECRET)
    monkeypatch.setattr(config, "ADMIN_SECRET_HASH", "")
    monkeypatch.delenv("LOCAL_RATE_LIMIT_FALLBACK", raising=False)

@pytest.fixture
def store(tmp_path) -> Generator[SqlStore, None, None]:
    s = SqlStore(tmp_path / "orders.db")
    s.init()
    yield s
    s.dispose()

@pytest.fixture
def app(store):
    return create_app(store=store, serve_static=False)

@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c

@pytest.fixture
def admin_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {ADMIN_SECRET}"}

# Stripe: lignes de session simulées (aucun appel réseau)
@pytest.fixture
def line_items(monkeypatch):
    state = SimpleNamespace(
        calls=[],
        items=[
            {"quantity": 2, "description": "Hot sauce"},
            {"quantity": 1, "description": "T-shirt"},
        ],
    )

    def _fake_list_line_items(session_id):
        state.calls.append(session_id)
        return state.items

    monkeypatch.setattr(stripe_client, "list_line_items", _fake_list_line_items)
    return state

@pytest.fixture
def sign():
    """Signe un payload comme Stripe: en-tête "t=<ts>,v1=<hmac-sha256>"."""
    def _sign(payload: bytes, secret: str = WEBHOOK_SECRET, timestamp: Optional[int] = None) -> str:
        ts = int(time.time()) if timestamp is None else timestamp
        signed = f"{ts}.".encode("utf-8") + payload
        digest = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
        return f"t={ts},v1={digest}"
    return _sign

@pytest.fixture
def make_event():
    def _make(
        session_id: str = "cs_test_123",
        amount_total: Any = 2598,
        email: Optional[str] = "buyer@example.com",
        event_type: str = "checkout.session.completed",
    ) -> Dict[str, Any]:
        session: Dict[str, Any] = {"id": session_id, "object": "checkout.session", "amount_total": amount_total}
        if email is not None:
            session["customer_details"] = {"email": email}
        return {"id": f"evt_{session_id}", "type": event_type, "data": {"object": session}}
    return _make

@pytest.fixture
def post_webhook_factory(sign):
    """Fabrique un poster de webhook signé pour un TestClient donné."""
    def _factory(test_client: TestClient):
        def _post(event: Dict[str, Any], *, secret: str = WEBHOOK_SECRET, signature: Optional[str] = None):
            payload = json.dumps(event).encode("utf-8")
            headers = {"Content-Type": "application/json"}
            sig = sign(payload, secret) if signature is None else signature
            if sig:
                headers["Stripe-Signature"] = sig
            return test_client.post("/webhook", content=payload, headers=headers)
        return _post
    return _factory

@pytest.fixture
def post_webhook(client, post_webhook_factory):
    return post_webhook_factory(client)

# Rate limiting réel (FastAPILimiter sur fakeredis), comme en production avec Redis
@pytest.fixture
def fake_redis_limiter(monkeypatch):
    monkeypatch.delenv("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", raising=False)
    monkeypatch.setenv("USE_FAKE_REDIS_FOR_TESTS", "1")
    # état de classe de FastAPILimiter restauré après le test
    for attr in ("redis", "prefix", "lua_sha", "identifier", "http_callback"):
        monkeypatch.setattr(FastAPILimiter, attr, getattr(FastAPILimiter, attr, None), raising=False)

@pytest.fixture
def limited_client(app, fake_redis_limiter) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        assert app.state.rate_limit_enabled is True
        assert FastAPILimiter.redis is not None
        yield c
