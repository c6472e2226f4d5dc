import pytest


def test_api_checkout_returns_id_and_url(client, stripe_calls):
    payload = {"items": [{"name": "Mug", "price": 1200, "quantity": 2}, {"name": "Sticker", "price": 75}]}
    res = client.post("/api/v1/payments/checkout", json=payload)
    assert res.status_code == 200
    assert res.json() == {"id": "cs_test_123", "url": "https://checkout.stripe.test/c/pay/cs_test_123"}
    assert len(stripe_calls[0]["line_items"]) == 2


def test_api_checkout_accepts_items_as_json_string(client, stripe_calls):
    res = client.post("/api/v1/payments/checkout", json={"items": '[{"name": "Mug", "price": 1200}]'})
    assert res.status_code == 200
    assert stripe_calls[0]["line_items"][0]["price_data"]["product_data"]["name"] == "Mug"


def test_api_checkout_empty_cart_is_json_400(client, stripe_calls):
    res = client.post("/api/v1/payments/checkout", json={"items": []})
    assert res.status_code == 400
    assert res.json() == {"detail": "Your cart is empty."}
    assert stripe_calls == []


def test_api_checkout_missing_items(client):
    res = client.post("/api/v1/payments/checkout", json={})
    assert res.status_code == 400
    assert res.json() == {"detail": "No items submitted."}


def test_api_checkout_invalid_body(client):
    res = client.post("/api/v1/payments/checkout", content="nope", headers={"content-type": "application/json"})
    assert res.status_code == 400
    assert res.json() == {"detail": "Request body is not valid JSON."}

    res = client.post("/api/v1/payments/checkout", json=[{"price": 1200}])
    assert res.status_code == 400
    assert res.json() == {"detail": "Request body must be a JSON object."}


def test_api_checkout_without_session_url_is_502(client, monkeypatch):
    monkeypatch.setattr(
        "storefront.payments.service.stripe_client.create_session",
        lambda **kwargs: {"id": "cs_test_nourl", "url": ""},
    )
    res = client.post("/api/v1/payments/checkout", json={"items": [{"name": "Mug", "price": 1200}]})
    assert res.status_code == 502
    assert res.json() == {"detail": "Stripe did not return a checkout URL."}


def test_api_checkout_rate_limited_with_local_fallback(client, monkeypatch):
    monkeypatch.setenv("LOCAL_RATE_LIMIT_FALLBACK", "1")
    client.app.state._rl_store = {}
    payload = {"items": [{"name": "Mug", "price": 1200}]}
    codes = [client.post("/api/v1/payments/checkout", json=payload).status_code for _ in range(11)]
    assert codes[:10] == [200] * 10
    assert codes[10] == 429
    client.app.state._rl_store = {}


@pytest.mark.parametrize(
    "body",
    [
        '{"items": [{"name": "Mug", "price": 1200, "quantity": NaN}]}',
        '{"items": [{"name": "Mug", "price": Infinity}]}',
    ],
)
def test_api_checkout_rejects_non_standard_json_constants(client, stripe_calls, body):
    res = client.post("/api/v1/payments/checkout", content=body, headers={"content-type": "application/json"})
    assert res.status_code == 400
    assert res.json() == {"detail": "Request body is not valid JSON."}
    assert stripe_calls == []


def test_api_checkout_huge_integer_quantity_falls_back_to_one(client, stripe_calls):
    body = '{"items": [{"name": "Mug", "price": 1200, "quantity": ' + "9" * 400 + "}]}"
    res = client.post("/api/v1/payments/checkout", content=body, headers={"content-type": "application/json"})
    assert res.status_code == 200
    assert stripe_calls[0]["line_items"][0]["quantity"] == 1
