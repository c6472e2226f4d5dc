import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Request, Depends, Form, HTTPException
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.concurrency import run_in_threadpool
from starlette.status import HTTP_303_SEE_OTHER

from storefront.utils.rate_limit import optional_rate_limit
from storefront.utils.csrf import validate_csrf_token
from storefront.payments import service as payments_service
from storefront.payments.cart import loads_json

logger = logging.getLogger(__name__)
web_router = APIRouter(tags=["Checkout"])
api_router = APIRouter(prefix="/api/v1/payments", tags=["Payments API"])

# module storefront.payments.views
@web_router.post("/checkout", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
def checkout_form(
    request: Request,
    items: Optional[str] = Form(None),
    csrf_token: Optional[str] = Form(None),
):
    """
    Soumission du formulaire panier: crée la session Stripe puis redirige (303) vers sa page hébergée.
    - Champ 'items': chaîne JSON [{name, price (centimes), quantity?, images?}, ...]
    - CSRF: si le cookie csrf_token existe, le champ csrf_token doit correspondre
    - Erreurs: remontent au gestionnaire d'exceptions (redirection vers le panier pour le web)
    """
    if not validate_csrf_token(request, {"csrf_token": csrf_token}, field_names=("csrf_token",)):
        raise HTTPException(status_code=403, detail="CSRF verification failed")
    session = payments_service.create_checkout_session(items)
    return RedirectResponse(url=session["url"], status_code=HTTP_303_SEE_OTHER)

@api_router.post("/checkout", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
async def create_checkout_session(request: Request):
    """
    Variante API: même validation que le formulaire, renvoie {id, url} au lieu de rediriger.
    - Entrée JSON: { "items": [ {...}, ... ] } ou { "items": "<chaîne JSON>" }
    - Erreurs: 400 si corps/panier invalide, 500 si configuration invalide, 502 si Stripe échoue
    """
    try:
        body: Dict[str, Any] = loads_json(await request.body())
    except ValueError:
        raise HTTPException(status_code=400, detail="Request body is not valid JSON.")
    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="Request body must be a JSON object.")
    session = await run_in_threadpool(payments_service.create_checkout_session, body.get("items"))
    return JSONResponse({"id": session.get("id"), "url": session.get("url")})
