"""
Cas d'usage 'reviews': validation des avis et sélection aléatoire pour l'affichage.
"""
from typing import Any, Dict, List

from fastapi import HTTPException
from starlette.concurrency import run_in_threadpool

from storefront import config
from .sampler import sample_reviews


def clean_review_text(text: Any) -> str:
    """
    Nettoie le texte d'un avis.
    - Soulève HTTPException(400) si vide (ou seulement des espaces) ou trop long.
    """
    if not isinstance(text, str) or not text.strip():
        raise HTTPException(status_code=400, detail="Review cannot be empty")
    cleaned = text.strip()
    if len(cleaned) > config.REVIEW_MAX_LENGTH:
        raise HTTPException(status_code=400, detail=f"Review is too long (max {config.REVIEW_MAX_LENGTH} characters)")
    return cleaned


async def add_review(store, text: Any) -> Dict[str, Any]:
    return await run_in_threadpool(store.insert_review, clean_review_text(text))


async def random_reviews(store) -> List[Dict[str, str]]:
    rows = await run_in_threadpool(store.list_reviews)
    texts = [r["text"] for r in rows]
    return [{"text": t} for t in sample_reviews(texts, limit=config.REVIEWS_SAMPLE_SIZE)]
