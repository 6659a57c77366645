"""Storefront: checkout Stripe, commandes via webhook et avis clients."""

__version__ = "1.0.0"
