"""
Construction des URLs de retour du checkout à partir de SITE_URL.
"""
import re
from typing import Dict
from fastapi import HTTPException

# Import du module (et non des constantes) pour rester patchable par les tests
import storefront.config as config

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)

# module storefront.payments.urls
def get_base_url() -> str:
    """
    Retourne SITE_URL sans slash final.
    - Soulève HTTPException(500) si l'URL est absente ou sans schéma http(s)://.
    """
    base = (config.SITE_URL or "").strip()
    if not _SCHEME_RE.match(base):
        raise HTTPException(
            status_code=500,
            detail="SITE_URL must be a full URL (e.g., http://localhost:8000 or https://your-domain.com)",
        )
    return base.rstrip("/")

def build_checkout_urls(base_url: str) -> Dict[str, str]:
    """
    success_url: {base}{CHECKOUT_SUCCESS_PATH} + session_id={CHECKOUT_SESSION_ID} (placeholder Stripe)
    cancel_url: {base}{CHECKOUT_CANCEL_PATH}
    """
    success_path = config.CHECKOUT_SUCCESS_PATH
    sep = "&" if "?" in success_path else "?"
    return {
        "success_url": f"{base_url}{success_path}{sep}session_id={{CHECKOUT_SESSION_ID}}",
        "cancel_url": f"{base_url}{config.CHECKOUT_CANCEL_PATH}",
    }
