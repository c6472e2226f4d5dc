"""
Cas d'usage 'payments': orchestre cart, urls et stripe_client.
"""
import logging
from typing import Any, Dict
from fastapi import HTTPException

import storefront.config as config
from . import cart as cart_logic
from . import stripe_client
from . import urls

logger = logging.getLogger(__name__)

def create_checkout_session(raw_items: Any) -> Dict[str, Any]:
    """
    Valide le panier puis crée la session Stripe Checkout.
    - raw_items: chaîne JSON du formulaire (ou liste déjà décodée côté API)
    - Toute la validation (panier puis SITE_URL) a lieu avant l'appel Stripe.
    - Soulève HTTPException(502) si Stripe ne renvoie pas d'URL.
    Retour: {"id", "url"}
    """
    items = cart_logic.parse_items_payload(raw_items)
    line_items = cart_logic.to_line_items(items)
    base = urls.get_base_url()
    session = stripe_client.create_session(
        line_items=line_items,
        locale=config.CHECKOUT_LOCALE,
        **urls.build_checkout_urls(base),
    )
    if not session.get("url"):
        logger.error("payments.checkout session without url id=%s", session.get("id"))
        raise HTTPException(status_code=502, detail="Stripe did not return a checkout URL.")
    logger.info(
        "payments.checkout session=%s lines=%s amount=%s",
        session.get("id"), len(line_items), cart_logic.cart_total(line_items),
    )
    return session
