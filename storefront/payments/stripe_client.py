"""
Adaptateur Stripe: centralise les appels et la configuration Stripe.
"""
import json
import logging
from typing import Any, Dict, List

import stripe

from storefront import config

logger = logging.getLogger(__name__)


class WebhookSignatureError(Exception):
    """Signature Stripe absente, invalide ou payload illisible."""


# module storefront.payments.stripe_client
def require_stripe():
    """
    Prépare et retourne le module stripe prêt à l’emploi.
    - Configure stripe.api_key via STRIPE_SECRET_KEY si disponible.
    - En absence de clé, les appels Stripe échoueront côté SDK (No API key provided).
    """
    if config.STRIPE_SECRET_KEY:
        stripe.api_key = config.STRIPE_SECRET_KEY
    return stripe

def create_session(
    *,
    line_items: List[Dict[str, Any]],
    success_url: str,
    cancel_url: str,
    mode: str = "payment",
) -> Dict[str, Any]:
    """
    Crée une session Stripe Checkout.
    Retour: {"id": "cs_test_...", "url": "https://checkout.stripe.com/..."}
    """
    require_stripe()
    session = stripe.checkout.Session.create(
        payment_method_types=["card"],
        mode=mode,
        line_items=line_items,
        success_url=success_url,
        cancel_url=cancel_url,
    )
    return {"id": session["id"], "url": getattr(session, "url", None)}

def list_line_items(session_id: str) -> List[Dict[str, Any]]:
    """
    Lignes d'une session Checkout: [{"quantity": 2, "description": "Hot sauce"}, ...].
    Appel bloquant (SDK Stripe synchrone): à exécuter hors de la boucle d'événements.
    """
    require_stripe()
    page = stripe.checkout.Session.list_line_items(session_id, limit=100)
    return [
        {"quantity": li["quantity"], "description": li["description"]}
        for li in page.auto_paging_iter()
    ]

def verify_event(payload: bytes, sig_header: str | None) -> Dict[str, Any]:
    """
    Valide la signature d'un webhook sur les octets bruts puis décode l'événement.
    - La vérification porte sur le body exact reçu, jamais re-sérialisé.
    - Soulève WebhookSignatureError si l'en-tête, le secret ou la signature manque/échoue.
    Retour: l'événement (dict) tel qu'envoyé par Stripe.
    """
    if not sig_header:
        raise WebhookSignatureError("missing Stripe-Signature header")
    if not config.STRIPE_WEBHOOK_SECRET:
        raise WebhookSignatureError("STRIPE_WEBHOOK_SECRET is not configured")
    try:
        text = payload.decode("utf-8")
    except UnicodeDecodeError as e:
        raise WebhookSignatureError("payload is not valid UTF-8") from e
    try:
        stripe.WebhookSignature.verify_header(
            text, sig_header, config.STRIPE_WEBHOOK_SECRET, tolerance=config.STRIPE_WEBHOOK_TOLERANCE
        )
    except stripe.SignatureVerificationError as e:
        raise WebhookSignatureError(str(e)) from e
    try:
        event = json.loads(text)
    except ValueError as e:
        raise WebhookSignatureError("payload is not valid JSON") from e
    if not isinstance(event, dict):
        raise WebhookSignatureError("payload is not a JSON object")
    return event
