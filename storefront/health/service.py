"""
Diagnostic de configuration du checkout (sans appel réseau, sans exposer de secret).
"""
from typing import Any, Dict
from fastapi import HTTPException

import storefront.config as config
from storefront.payments import stripe_client
from storefront.payments import urls

def health_stripe_info() -> Dict[str, Any]:
    info: Dict[str, Any] = {
        "secret_key_configured": bool(config.STRIPE_SECRET_KEY),
        "mode": stripe_client.key_mode(),
        "site_url": config.SITE_URL or None,
        "site_url_ok": False,
        "error": None,
    }
    try:
        urls.get_base_url()
        info["site_url_ok"] = True
    except HTTPException as e:
        info["error"] = e.detail
    return info
