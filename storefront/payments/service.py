"""
Cas d'usage 'payments': orchestre cart, stripe_client et le store.

- create_checkout_session: panier -> session Stripe Checkout.
- ingest_event: événement webhook vérifié -> une ligne orders (au plus une par session).
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional

import stripe
from starlette.concurrency import run_in_threadpool

from storefront import config
from storefront.store import StoreError, utc_now_iso
from . import cart as cart_logic
from . import stripe_client

logger = logging.getLogger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"
UNKNOWN_EMAIL = "unknown"


async def create_checkout_session(items: Any) -> Dict[str, Any]:
    """
    Valide le panier, construit les line_items (centimes) et crée la session Stripe.
    Soulève HTTPException(400) si le panier est invalide; les erreurs Stripe remontent.
    """
    cleaned = cart_logic.validate_items(items)
    line_items = cart_logic.to_line_items(cleaned, config.CHECKOUT_CURRENCY)
    success_url = f"{config.BASE_URL}{config.CHECKOUT_SUCCESS_PATH}"
    cancel_url = f"{config.BASE_URL}{config.CHECKOUT_CANCEL_PATH}"
    session = await run_in_threadpool(
        lambda: stripe_client.create_session(
            line_items=line_items,
            success_url=success_url,
            cancel_url=cancel_url,
        )
    )
    logger.info("checkout session created id=%s lines=%s", session.get("id"), len(line_items))
    return session


def summarize_line_items(line_items: Optional[List[Dict[str, Any]]]) -> str:
    """[{quantity: 2, description: "Sauce"}] -> "2 x Sauce" (séparateur ", ")."""
    return ", ".join(
        f"{li.get('quantity')} x {li.get('description')}" for li in (line_items or [])
    )


def minor_to_major(amount: Any) -> float:
    """Centimes -> unités majeures, arrondi à 2 décimales (None -> 0.0)."""
    try:
        return round(int(amount or 0) / 100, 2)
    except (TypeError, ValueError):
        return 0.0


def customer_email(session: Dict[str, Any]) -> str:
    details = session.get("customer_details") or {}
    return details.get("email") or session.get("customer_email") or UNKNOWN_EMAIL


def build_order(session: Dict[str, Any], line_items: Optional[List[Dict[str, Any]]]) -> Dict[str, Any]:
    """Ligne orders à partir d'une session Checkout complétée et de ses lignes."""
    return {
        "id": session["id"],
        "email": customer_email(session),
        "items": summarize_line_items(line_items),
        "total": minor_to_major(session.get("amount_total")),
        "date": utc_now_iso(),
    }


async def fetch_line_items(session_id: str) -> Optional[List[Dict[str, Any]]]:
    """
    Récupère les lignes de la session avec un délai borné (STRIPE_LINE_ITEMS_TIMEOUT).
    - Exécuté dans un thread de l'executor: un dépassement rend la main immédiatement.
    - Timeout, erreur Stripe ou lignes illisibles: log puis None (la commande est enregistrée sans détail).
    """
    loop = asyncio.get_running_loop()
    try:
        return await asyncio.wait_for(
            loop.run_in_executor(None, stripe_client.list_line_items, session_id),
            timeout=config.STRIPE_LINE_ITEMS_TIMEOUT,
        )
    except asyncio.TimeoutError:
        logger.warning(
            "line items fetch timed out session=%s timeout=%ss", session_id, config.STRIPE_LINE_ITEMS_TIMEOUT
        )
    except stripe.StripeError:
        logger.exception("line items fetch failed session=%s", session_id)
    except Exception:
        logger.exception("unexpected line items payload session=%s", session_id)
    return None


async def ingest_event(store, event: Dict[str, Any]) -> str:
    """
    Traite un événement webhook déjà vérifié.
    Retourne le statut: "ignored", "created", "duplicate" ou "error".
    - Seul checkout.session.completed est persisté.
    - Une redélivrance du même id de session ne crée pas de doublon.
    - Un échec de stockage est journalisé et rapporté en "error" (l'appelant acquitte quand même).
    """
    event_type = event.get("type")
    if event_type != CHECKOUT_COMPLETED:
        logger.info("webhook event ignored type=%s", event_type)
        return "ignored"

    session = (event.get("data") or {}).get("object") or {}
    session_id = session.get("id")
    if not session_id:
        logger.warning("webhook %s without session id event=%s", event_type, event.get("id"))
        return "ignored"

    line_items = await fetch_line_items(session_id)
    if line_items is None:
        logger.warning("order %s saved without line items", session_id)
    order = build_order(session, line_items)

    try:
        created = await run_in_threadpool(store.insert_order, order)
    except StoreError:
        logger.exception("DB error while saving order %s", session_id)
        return "error"

    if not created:
        logger.info("duplicate delivery for order %s, nothing written", session_id)
        return "duplicate"
    logger.info("order saved id=%s total=%s", session_id, order["total"])
    return "created"
