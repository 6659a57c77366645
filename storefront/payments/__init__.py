"""
Module 'payments' (feature-first): point d'entrée public.
Réunit logique panier, client Stripe et ingestion des webhooks.
"""

from .cart import validate_items, to_line_items, to_minor_units
from .stripe_client import (
    WebhookSignatureError,
    require_stripe,
    create_session,
    list_line_items,
    verify_event,
)
from .service import (
    CHECKOUT_COMPLETED,
    build_order,
    create_checkout_session,
    ingest_event,
    minor_to_major,
    summarize_line_items,
)

__all__ = [
    # cart
    "validate_items",
    "to_line_items",
    "to_minor_units",
    # stripe
    "WebhookSignatureError",
    "require_stripe",
    "create_session",
    "list_line_items",
    "verify_event",
    # services
    "CHECKOUT_COMPLETED",
    "build_order",
    "create_checkout_session",
    "ingest_event",
    "minor_to_major",
    "summarize_line_items",
]
