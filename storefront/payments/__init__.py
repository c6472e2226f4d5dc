"""
Module 'payments' (feature-first): point d'entrée public.
Réunit logique panier, URLs de retour, client Stripe et cas d'usage checkout.
"""

from .cart import (
    MIN_UNIT_AMOUNT,
    parse_items_payload,
    normalize_item,
    to_line_items,
    cart_total,
)
from .urls import get_base_url, build_checkout_urls
from .stripe_client import require_stripe, create_session
from .service import create_checkout_session

__all__ = [
    # cart
    "MIN_UNIT_AMOUNT",
    "parse_items_payload",
    "normalize_item",
    "to_line_items",
    "cart_total",
    # urls
    "get_base_url",
    "build_checkout_urls",
    # stripe
    "require_stripe",
    "create_session",
    # services
    "create_checkout_session",
]
