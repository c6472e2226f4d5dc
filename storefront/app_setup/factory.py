"""
Factory d'application pour les entrypoints (storefront.app, storefront.asgi).
Ordonne les étapes d'initialisation de manière lisible et testable.
"""
from fastapi import FastAPI
from .lifespan import lifespan
from .middlewares import register_basic_middlewares, register_security_middleware, register_force_https_middleware
from .exceptions import register_exception_handlers
from .routers import register_routers
from storefront.utils.csrf import register_csrf_middleware

def create_app() -> FastAPI:
    """
    Construit l'app FastAPI avec le lifespan et enregistre:
      - middlewares de base, cookie CSRF, en-têtes de sécurité
      - gestionnaire d'exceptions
      - tous les routers (web, API, health)
      - redirection HTTPS en dernier pour qu'elle s'exécute en premier
    """
    app = FastAPI(title="Storefront Checkout", lifespan=lifespan)
    register_basic_middlewares(app)
    register_csrf_middleware(app)
    register_security_middleware(app)
    register_exception_handlers(app)
    register_routers(app)
    register_force_https_middleware(app)
    return app
