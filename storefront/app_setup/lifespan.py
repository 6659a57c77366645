"""
Lifespan FastAPI: initialisation/arrêt des ressources partagées.
- Store SQLite: création des tables + avis d'exemple (idempotent à chaque démarrage).
- FastAPILimiter (Redis) avec options de test.
- Variables d’environnement supportées:
  - DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS=1: désactive complètement (tests)
  - USE_FAKE_REDIS_FOR_TESTS=1: utilise fakeredis (tests)
  - RATE_LIMIT_REDIS_URL: URL Redis (défaut redis://127.0.0.1:6379/0)
  - LOCAL_RATE_LIMIT_FALLBACK=1: active un fallback mémoire si l’init échoue
"""
import os
import logging
from contextlib import asynccontextmanager

import redis.asyncio as aioredis
from fastapi import FastAPI
from fastapi_limiter import FastAPILimiter
from starlette.concurrency import run_in_threadpool

from storefront import config
from storefront.store import SqlStore

try:
    from fakeredis.aioredis import FakeRedis  # tests only
except ImportError:
    FakeRedis = None

async def init_rate_limiter(app: FastAPI, logger: logging.Logger) -> bool:
    """Retourne True si FastAPILimiter a été initialisé (à fermer au shutdown)."""
    if os.getenv("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS") == "1":
        app.state.rate_limit_enabled = False
        logger.info("Rate limiting disabled by DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS")
        return False
    try:
        if os.getenv("USE_FAKE_REDIS_FOR_TESTS") == "1":
            if not FakeRedis:
                raise RuntimeError("USE_FAKE_REDIS_FOR_TESTS=1 mais fakeredis n'est pas installé.")
            r = FakeRedis(decode_responses=True)
        else:
            redis_url = os.getenv("RATE_LIMIT_REDIS_URL", "redis://127.0.0.1:6379/0")
            r = aioredis.from_url(redis_url, encoding="utf-8", decode_responses=True)
        await FastAPILimiter.init(r)
        app.state.rate_limit_enabled = True
        logger.info("Rate limiting enabled")
        return True
    except Exception as e:
        if os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1":
            app.state.rate_limit_enabled = True
            logger.warning(f"Rate limiting falling back to local in-memory due to init error: {e}")
        else:
            app.state.rate_limit_enabled = False
            logger.warning(f"Rate limiting disabled due to init error: {e}")
        return False

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    - Utilise le store injecté par create_app(store=...) ou ouvre DATABASE_PATH.
    - Un échec d'initialisation du store empêche le démarrage (pas de service sans base).
    """
    logger = logging.getLogger("uvicorn.error")

    owns_store = getattr(app.state, "store", None) is None
    if owns_store:
        app.state.store = SqlStore(config.DATABASE_PATH)
    seeded = await run_in_threadpool(app.state.store.init)
    logger.info("Store ready (seeded=%s)", seeded)

    limiter_started = await init_rate_limiter(app, logger)

    yield

    if limiter_started:
        await FastAPILimiter.close()
    if owns_store:
        app.state.store.dispose()
        app.state.store = None
