"""
Logique panier pure (pas de Stripe, pas de DB).
"""
import math
from typing import Any, Dict, List

from fastapi import HTTPException

# module storefront.payments.cart
def _positive_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return number

def validate_items(items: Any) -> List[Dict[str, Any]]:
    """
    Valide un panier brut [{title, price, qty}, ...] et le normalise.
    - qty peut aussi être fourni sous la clé "quantity".
    - price: nombre fini > 0 (unités majeures, ex: dollars).
    - qty: entier > 0.
    - Soulève HTTPException(400) à la première ligne invalide ou si le panier est vide.
    """
    if not isinstance(items, list) or not items:
        raise HTTPException(status_code=400, detail="Cart is empty")

    cleaned: List[Dict[str, Any]] = []
    for index, it in enumerate(items):
        if not isinstance(it, dict):
            raise HTTPException(status_code=400, detail=f"Invalid cart item at position {index}")
        title = str(it.get("title") or "").strip()
        if not title:
            raise HTTPException(status_code=400, detail=f"Missing title at position {index}")
        price = _positive_number(it.get("price"))
        if price is None:
            raise HTTPException(status_code=400, detail=f"Invalid price for '{title}'")
        qty = _positive_number(it.get("qty", it.get("quantity")))
        if qty is None or not qty.is_integer():
            raise HTTPException(status_code=400, detail=f"Invalid quantity for '{title}'")
        cleaned.append({"title": title, "price": price, "qty": int(qty)})
    return cleaned

def to_minor_units(amount: float) -> int:
    """Montant en unités majeures -> centimes (arrondi au plus proche)."""
    return int(round(amount * 100))

def to_line_items(items: List[Dict[str, Any]], currency: str) -> List[Dict[str, Any]]:
    """
    Construit les line_items Stripe (price_data) depuis un panier validé.
    """
    line_items: List[Dict[str, Any]] = []
    for it in items:
        unit_amount = to_minor_units(it["price"])
        if unit_amount <= 0:
            raise HTTPException(status_code=400, detail=f"Invalid price for '{it['title']}'")
        line_items.append({
            "quantity": it["qty"],
            "price_data": {
                "currency": currency,
                "unit_amount": unit_amount,
                "product_data": {"name": it["title"]},
            },
        })
    return line_items
