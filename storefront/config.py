# storefront.config
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=True)

"""
Configuration centrale du service checkout.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Normalise et expose le secret Stripe et l'URL publique du site
- Fournit les chemins de retour du checkout (succès/annulation) et les réglages fixes (devise, locale)
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

# Stripe: clé secrète (obligatoire, vérifiée au chargement de storefront.payments.stripe_client)
STRIPE_SECRET_KEY = _clean_env(os.getenv("STRIPE_SECRET_KEY") or "")

# URL publique du site (doit inclure http:// ou https://), validée à chaque checkout
SITE_URL = _clean_env(os.getenv("SITE_URL") or os.getenv("NEXT_PUBLIC_SITE_URL") or "")

# Pages de succès/annulation du checkout (relatives à SITE_URL)
CHECKOUT_SUCCESS_PATH = os.getenv("CHECKOUT_SUCCESS_PATH", "/success")
CHECKOUT_CANCEL_PATH = os.getenv("CHECKOUT_CANCEL_PATH", "/cart")

# Réglages fixes de la session Stripe
CHECKOUT_CURRENCY = "usd"
CHECKOUT_LOCALE = _clean_env(os.getenv("CHECKOUT_LOCALE") or "en")

# Cookies/ Sécurité
COOKIE_SECURE = (os.getenv("COOKIE_SECURE", "false").lower() == "true")

# CORS (dev)
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
ALLOWED_HOSTS = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h.strip()]
