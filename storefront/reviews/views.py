# module storefront.reviews.views
"""Endpoints des avis clients (publics).
- POST /add-review: enregistre un avis (texte nettoyé, non vide), rate-limité.
- GET /reviews: jusqu'à 20 avis dans un ordre aléatoire.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from storefront.store import StoreError, get_store
from storefront.utils.rate_limit import optional_rate_limit
from storefront.reviews import service as reviews_service

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Reviews"])


@router.post("/add-review", dependencies=[Depends(optional_rate_limit(times=5, seconds=60))])
async def add_review(request: Request, store=Depends(get_store)):
    try:
        body = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Review cannot be empty")
    text = body.get("text") if isinstance(body, dict) else None
    try:
        await reviews_service.add_review(store, text)
    except StoreError:
        logger.exception("Error saving review")
        raise HTTPException(status_code=500, detail="Failed to save review")
    return {"success": True}


@router.get("/reviews")
async def list_reviews(store=Depends(get_store)):
    try:
        return await reviews_service.random_reviews(store)
    except StoreError:
        logger.exception("Error fetching reviews")
        raise HTTPException(status_code=500, detail="Failed to fetch reviews")
