# module storefront.orders.views
"""Endpoints de consultation des commandes.
- GET /orders: liste complète (admin, Authorization: Bearer <secret>), plus récentes d'abord.
- GET /order/{order_id}: lecture publique d'une commande (page de succès).
"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from starlette.concurrency import run_in_threadpool

from storefront.store import StoreError, get_store
from storefront.utils.security import require_admin

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Orders"])


@router.get("/orders", dependencies=[Depends(require_admin)])
async def list_orders(store=Depends(get_store)):
    try:
        return await run_in_threadpool(store.list_orders)
    except StoreError:
        logger.exception("Error fetching orders")
        raise HTTPException(status_code=500, detail="Failed to fetch orders")


@router.get("/order/{order_id}")
async def get_order(order_id: str, store=Depends(get_store)):
    try:
        order = await run_in_threadpool(store.get_order, order_id)
    except StoreError:
        logger.exception("Error fetching order %s", order_id)
        raise HTTPException(status_code=500, detail="Failed to fetch order")
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order
