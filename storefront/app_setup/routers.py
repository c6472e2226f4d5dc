"""
Registre central des routers.
- Web: formulaire panier (POST /checkout)
- API v1: payments
- Health: /health, /health/stripe
"""
from fastapi import FastAPI
from storefront.payments import views as payments_views
from storefront.health.router import router as health_router

def register_routers(app: FastAPI) -> None:
    # Formulaire web
    app.include_router(payments_views.web_router)
    # API v1
    app.include_router(payments_views.api_router)
    # Health & monitoring
    app.include_router(health_router)
