import os
import sys

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))
import config
import main
import payment_gateway

ADDRESS = {
    "country": "IN",
    "state": "MH",
    "city": "Pune",
    "postal_code": "411001",
    "address_line": "Addr",
}


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(config, "PAYKUN_MERCHANT_ID", "M1")
    monkeypatch.setattr(config, "PAYKUN_ACCESS_TOKEN", "TOK1")
    monkeypatch.setattr(config, "PAYKUN_ENCRYPTION_KEY", "KEY1")
    monkeypatch.setattr(config, "PAYKUN_IS_LIVE", False)
    monkeypatch.setattr(config, "PAYKUN_SUCCESS_URL", "https://shop.example/ok")
    monkeypatch.setattr(config, "PAYKUN_FAILURE_URL", "https://shop.example/fail")
    return TestClient(main.app)


def checkout_body(**order):
    return {
        "order": {"order_id": "ORD1", "purpose": "Widget", "amount": "100.00", **order},
        "customer": {"name": "Jane", "email": "j@x.com", "phone": "555"},
        "shipping": ADDRESS,
    }


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


def test_checkout_renders_auto_submit_form(client):
    res = client.post("/checkout", json=checkout_body())
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/html")
    assert payment_gateway.GATEWAY_URL_DEV in res.text
    assert 'name="merchant_id" value="M1"' in res.text


def test_checkout_uses_configured_urls_and_billing_fallback(client):
    body = main.CheckoutIn(**checkout_body())
    canonical = main.build_payment(body).canonical_payload()
    assert "success_url::https://shop.example/ok" in canonical
    assert "billing_city::Pune" in canonical


def test_checkout_validation_error(client):
    res = client.post("/checkout", json=checkout_body(success_url="not a url"))
    assert res.status_code == 400
    assert res.json() == {"error": "Invalid success url", "code": 7}


def test_checkout_missing_credentials(client, monkeypatch):
    monkeypatch.setattr(config, "PAYKUN_MERCHANT_ID", None)
    res = client.post("/checkout", json=checkout_body())
    assert res.status_code == 400
    assert res.json()["code"] == 1
