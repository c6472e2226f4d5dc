"""
Adaptateur Stripe: centralise la configuration et les appels Stripe.
La clé secrète est vérifiée dès le chargement du module: sans elle, l'application ne démarre pas.
"""
import logging
import stripe
from typing import Any, Dict, List
from fastapi import HTTPException

import storefront.config as config

logger = logging.getLogger(__name__)

if not config.STRIPE_SECRET_KEY:
    raise RuntimeError("STRIPE_SECRET_KEY is missing in .env")
stripe.api_key = config.STRIPE_SECRET_KEY

# module storefront.payments.stripe_client
def require_stripe():
    """
    Prépare et retourne le module stripe prêt à l'emploi.
    - Configure stripe.api_key via STRIPE_SECRET_KEY.
    - Soulève HTTPException(500) si la clé a disparu de la configuration.
    """
    if not config.STRIPE_SECRET_KEY:
        raise HTTPException(status_code=500, detail="STRIPE_SECRET_KEY is missing")
    stripe.api_key = config.STRIPE_SECRET_KEY
    return stripe

def _field(obj: Any, name: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)

def create_session(
    *,
    line_items: List[Dict[str, Any]],
    success_url: str,
    cancel_url: str,
    locale: str = "en",
) -> Dict[str, Any]:
    """
    Crée une session Stripe Checkout en mode 'payment'.
    - line_items: lignes Stripe avec price_data (montants en centimes)
    - success_url / cancel_url: URLs de redirection
    - locale: langue forcée de la page hébergée
    Retour: {"id": "cs_test_...", "url": "https://checkout.stripe.com/..."}
    Les erreurs du SDK sont journalisées puis converties en HTTPException(502).
    """
    require_stripe()
    try:
        session = stripe.checkout.Session.create(
            mode="payment",
            line_items=line_items,
            success_url=success_url,
            cancel_url=cancel_url,
            locale=locale,
        )
    except stripe.StripeError as e:
        logger.exception("payments.stripe_client.create_session failed lines=%s", len(line_items))
        raise HTTPException(status_code=502, detail=f"Payment provider error: {e.user_message or e}")
    return {"id": _field(session, "id"), "url": _field(session, "url")}

def key_mode() -> str:
    """Mode de la clé configurée (test/live/unknown), sans jamais l'exposer."""
    key = config.STRIPE_SECRET_KEY or ""
    if key.startswith(("sk_test_", "rk_test_")):
        return "test"
    if key.startswith(("sk_live_", "rk_live_")):
        return "live"
    return "unknown"
