# module storefront.utils.csrf
from typing import Any, Iterable
from fastapi import FastAPI, Request
from fastapi.responses import Response
import secrets
from storefront.config import COOKIE_SECURE

CSRF_COOKIE_NAME = "csrf_token"
CSRF_FIELD_NAMES = ("X-CSRF-Token", "csrf_token")

def get_or_create_csrf_token(request: Request) -> str:
    """
    Renvoie le token CSRF existant (cookie) ou en crée un nouveau.
    """
    token = request.cookies.get(CSRF_COOKIE_NAME)
    if not token:
        token = secrets.token_urlsafe(32)
    return token

def attach_csrf_cookie_if_missing(response: Response, request: Request, token: str) -> None:
    """
    Pose le cookie CSRF si absent pour le navigateur.
    Lisible en JS: le front recopie sa valeur dans le champ csrf_token du formulaire panier.
    """
    if not request.cookies.get(CSRF_COOKIE_NAME):
        response.set_cookie(
            key=CSRF_COOKIE_NAME,
            value=token,
            httponly=False,
            secure=COOKIE_SECURE,
            samesite="Lax",
            max_age=60 * 60,
            path="/",
        )

def validate_csrf_token(request: Request, form_data: Any, field_names: Iterable[str] = CSRF_FIELD_NAMES) -> bool:
    """
    Valide le token CSRF (double submit) en comparant le champ du formulaire et le cookie.
    - Si le cookie n'existe pas, on ne bloque pas (POST direct, intégrations serveur).
    - Accepte plusieurs noms de champ: X-CSRF-Token ou csrf_token.
    """
    token_cookie = request.cookies.get(CSRF_COOKIE_NAME)
    if not token_cookie:
        return True
    token_form = None
    for name in field_names:
        if hasattr(form_data, "get"):
            token_form = form_data.get(name)
            if token_form:
                break
    return bool(token_form) and secrets.compare_digest(str(token_form), token_cookie)

def register_csrf_middleware(app: FastAPI) -> None:
    """Dépose le cookie CSRF sur chaque réponse tant que le navigateur ne l'a pas."""
    @app.middleware("http")
    async def csrf_cookie(request: Request, call_next):
        token = get_or_create_csrf_token(request)
        response = await call_next(request)
        attach_csrf_cookie_if_missing(response, request, token)
        return response
