import os

# Configuration minimale avant l'import de l'app (clé vérifiée au chargement de stripe_client)
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_dummy")
os.environ.setdefault("SITE_URL", "http://localhost:4321")
os.environ["DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS"] = "1"

import pytest
from types import SimpleNamespace
from typing import Generator, Dict, Any, List
from fastapi.testclient import TestClient

import storefront.config as storefront_config
from storefront.app import app as fastapi_app
from storefront.payments import stripe_client

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)
        elif "/functional/" in nodeid:
            item.add_marker(pytest.mark.functional)

@pytest.fixture(scope="session")
def app():
    return fastapi_app

@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c

# Configuration stable pour chaque test (indépendante d'un éventuel .env local)
@pytest.fixture(autouse=True)
def _checkout_config(monkeypatch):
    monkeypatch.setattr(storefront_config, "STRIPE_SECRET_KEY", "sk_test_dummy")
    monkeypatch.setattr(storefront_config, "SITE_URL", "http://localhost:4321")
    monkeypatch.setattr(storefront_config, "CHECKOUT_SUCCESS_PATH", "/success")
    monkeypatch.setattr(storefront_config, "CHECKOUT_CANCEL_PATH", "/cart")
    monkeypatch.delenv("LOCAL_RATE_LIMIT_FALLBACK", raising=False)

# Faux Stripe: aucune requête réseau, on enregistre les appels à Session.create
@pytest.fixture(autouse=True)
def stripe_calls(monkeypatch) -> List[Dict[str, Any]]:
    calls: List[Dict[str, Any]] = []

    def _fake_create(**kwargs):
        calls.append(kwargs)
        return SimpleNamespace(id="cs_test_123", url="https://checkout.stripe.test/c/pay/cs_test_123")

    monkeypatch.setattr(stripe_client.stripe.checkout.Session, "create", _fake_create)
    return calls
