# module storefront.payments.views
"""Endpoints paiement.
- /create-checkout-session: crée une session Stripe Checkout pour le panier (rate-limité).
- /webhook: reçoit les événements Stripe signés et enregistre la commande.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from storefront.store import get_store
from storefront.utils.rate_limit import optional_rate_limit
from storefront.payments import service as payments_service
from storefront.payments import stripe_client

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Payments"])


@router.post("/create-checkout-session", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
async def create_checkout_session(request: Request):
    """
    Crée une session Checkout Stripe pour le panier.
    - Entrée JSON: { "items": [ { "title": "...", "price": 9.99, "qty": 2 }, ... ] }
    - Sortie: { "id": "<session_id>", "url": "<page de paiement hébergée>" }
    - Erreurs: 400 si panier invalide, 500 si Stripe échoue
    """
    try:
        body = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid JSON body")
    items = body.get("items") if isinstance(body, dict) else None
    try:
        session = await payments_service.create_checkout_session(items)
        return {"id": session.get("id"), "url": session.get("url")}
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Checkout error")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/webhook", include_in_schema=False)
async def webhook_stripe(request: Request, store=Depends(get_store)):
    """
    Webhook Stripe: consomme checkout.session.completed pour créer la commande.
    - Signature: vérifiée sur le body brut (Stripe-Signature + STRIPE_WEBHOOK_SECRET) -> 400 sinon.
    - Tout le reste est acquitté en 200 pour éviter les tentatives en boucle côté Stripe.
    """
    payload = await request.body()
    sig_header = request.headers.get("stripe-signature")
    try:
        event = stripe_client.verify_event(payload, sig_header)
    except stripe_client.WebhookSignatureError as e:
        logger.warning("Webhook signature verification failed: %s", e)
        return JSONResponse({"error": "Invalid signature"}, status_code=400)

    try:
        status = await payments_service.ingest_event(store, event)
    except Exception:
        logger.exception("Webhook processing failed event=%s", event.get("id"))
        status = "error"
    return JSONResponse({"status": status})
