"""
Module 'store': stockage SQLite (orders, reviews) et dépendance FastAPI.
"""
from fastapi import Request

from .models import Order, Review, utc_now_iso
from .repository import SAMPLE_REVIEWS, SqlStore, StoreError


def get_store(request: Request):
    """Dépendance FastAPI: le store injecté par create_app()/lifespan."""
    return request.app.state.store


__all__ = [
    "Order",
    "Review",
    "utc_now_iso",
    "SAMPLE_REVIEWS",
    "SqlStore",
    "StoreError",
    "get_store",
]
