import json
import pytest
from fastapi import HTTPException

import storefront.config as config
from storefront.payments import service as payments_service


def test_create_checkout_session_example(stripe_calls):
    session = payments_service.create_checkout_session(json.dumps([{"name": "Mug", "price": 1200, "quantity": 2}]))
    assert session["url"] == "https://checkout.stripe.test/c/pay/cs_test_123"
    assert len(stripe_calls) == 1
    call = stripe_calls[0]
    assert call["mode"] == "payment"
    assert call["locale"] == "en"
    assert call["success_url"] == "http://localhost:4321/success?session_id={CHECKOUT_SESSION_ID}"
    assert call["cancel_url"] == "http://localhost:4321/cart"
    assert call["line_items"] == [{
        "price_data": {"currency": "usd", "product_data": {"name": "Mug", "images": []}, "unit_amount": 1200},
        "quantity": 2,
    }]


@pytest.mark.parametrize("raw", [None, "", "not json", "[]", json.dumps([{"price": 10}])])
def test_invalid_cart_fails_before_outbound_call(stripe_calls, raw):
    with pytest.raises(HTTPException) as exc:
        payments_service.create_checkout_session(raw)
    assert exc.value.status_code == 400
    assert stripe_calls == []


def test_malformed_base_url_fails_before_outbound_call(monkeypatch, stripe_calls):
    monkeypatch.setattr(config, "SITE_URL", "localhost:4321")
    with pytest.raises(HTTPException) as exc:
        payments_service.create_checkout_session(json.dumps([{"name": "Mug", "price": 1200}]))
    assert exc.value.status_code == 500
    assert stripe_calls == []


def test_cart_errors_win_over_base_url_errors(monkeypatch, stripe_calls):
    monkeypatch.setattr(config, "SITE_URL", "")
    with pytest.raises(HTTPException) as exc:
        payments_service.create_checkout_session("[]")
    assert exc.value.detail == "Your cart is empty."


def test_missing_session_url_raises(monkeypatch):
    monkeypatch.setattr(
        "storefront.payments.service.stripe_client.create_session",
        lambda **kwargs: {"id": "cs_test_nourl", "url": None},
    )
    with pytest.raises(HTTPException) as exc:
        payments_service.create_checkout_session(json.dumps([{"name": "Mug", "price": 1200}]))
    assert exc.value.status_code == 502
    assert exc.value.detail == "Stripe did not return a checkout URL."


def test_locale_comes_from_config(monkeypatch, stripe_calls):
    monkeypatch.setattr(config, "CHECKOUT_LOCALE", "fr")
    payments_service.create_checkout_session(json.dumps([{"name": "Mug", "price": 1200}]))
    assert stripe_calls[0]["locale"] == "fr"
