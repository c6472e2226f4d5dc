"""
Gestionnaire d'exceptions HTTP de l'application.
- Formulaire panier (navigateur, hors /api/*) en erreur 400 ou 403: redirection vers la page panier avec le message.
- Sinon: réponse JSON standard {"detail": ...} pour les clients API.
"""
import logging
import urllib.parse
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.status import HTTP_303_SEE_OTHER

import storefront.config as config
from storefront.payments import urls

logger = logging.getLogger(__name__)

# Erreurs du formulaire panier renvoyées vers la page panier (saisie invalide, CSRF)
_CART_REDIRECT_STATUSES = (400, 403)

def _wants_html(request: Request) -> bool:
    accept = (request.headers.get("accept") or "").lower()
    ctype = (request.headers.get("content-type") or "").lower()
    is_form = ctype.startswith(("application/x-www-form-urlencoded", "multipart/form-data"))
    return not request.url.path.startswith("/api/") and ("text/html" in accept or is_form)

def register_exception_handlers(app: FastAPI) -> None:
    """
    Enregistre le handler HTTPException.
    - UX web: redirection 303 vers {SITE_URL}{CHECKOUT_CANCEL_PATH}?error=... pour les erreurs de panier.
    - UX API (ou SITE_URL invalide): code et body JSON FastAPI standards.
    """
    @app.exception_handler(HTTPException)
    async def redirect_cart_errors(request: Request, exc: HTTPException):
        if exc.status_code >= 500:
            logger.error("http.error status=%s path=%s detail=%s", exc.status_code, request.url.path, exc.detail)
        if exc.status_code in _CART_REDIRECT_STATUSES and _wants_html(request):
            try:
                base = urls.get_base_url()
            except HTTPException:
                base = None
            if base:
                msg = urllib.parse.quote_plus(str(exc.detail or "Checkout failed"))
                sep = "&" if "?" in config.CHECKOUT_CANCEL_PATH else "?"
                return RedirectResponse(
                    url=f"{base}{config.CHECKOUT_CANCEL_PATH}{sep}error={msg}",
                    status_code=HTTP_303_SEE_OTHER,
                )
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=getattr(exc, "headers", None))
