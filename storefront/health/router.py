import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from storefront.store import StoreError, get_store
from storefront.utils.rate_limit import rate_limit_health_info

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["Health"])


def health_store_info(store) -> dict:
    try:
        return {"connect_ok": True, "orders": store.count_orders(), "reviews": store.count_reviews()}
    except StoreError as e:
        logger.warning("health store check failed: %s", e)
        return {"connect_ok": False, "error": str(e)}


@router.get("")
def health_root():
    return {"ok": True}

@router.get("/store")
async def health_store(store=Depends(get_store)):
    info = await run_in_threadpool(health_store_info, store)
    return JSONResponse(info, status_code=200 if info["connect_ok"] else 503)

@router.get("/rate-limit")
def health_rate_limit(request: Request):
    return rate_limit_health_info(request)
