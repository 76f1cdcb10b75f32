import pytest
from fastapi.testclient import TestClient

from vibepay.main import app
from vibepay.services import payments_service
from vibepay.services.payments_service import FlutterwaveError

UPSTREAM_BODY = {
    "status": "success",
    "message": "Hosted Link",
    "data": {"link": "https://checkout.flutterwave.com/v3/hosted/pay/abc123"},
}


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


def test_liveness_is_plain_text(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/plain")
    assert resp.text == "Vibe Hackathon Payment API is running 🎉"


def test_pay_relays_upstream_body_verbatim(client, monkeypatch):
    received = []

    async def fake_create_payment(payload):
        received.append(payload)
        return UPSTREAM_BODY

    monkeypatch.setattr(payments_service, "create_payment", fake_create_payment)

    resp = client.post("/pay", json={"amount": 1500, "email": "ada@example.com", "name": "Ada"})

    assert resp.status_code == 200
    assert resp.json() == UPSTREAM_BODY
    assert received[0].amount == 1500
    assert received[0].email == "ada@example.com"
    assert received[0].name == "Ada"


def test_pay_maps_upstream_throw_to_500(client, monkeypatch):
    async def failing_create_payment(payload):
        raise RuntimeError("getaddrinfo ENOTFOUND api.flutterwave.com")

    monkeypatch.setattr(payments_service, "create_payment", failing_create_payment)

    resp = client.post("/pay", json={"amount": 10, "email": "ada@example.com", "name": "Ada"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "getaddrinfo ENOTFOUND api.flutterwave.com"}


def test_pay_maps_upstream_rejection_to_500(client, monkeypatch):
    async def rejected(payload):
        raise FlutterwaveError(400, {"status": "error"})

    monkeypatch.setattr(payments_service, "create_payment", rejected)

    resp = client.post("/pay", json={"amount": 10})

    assert resp.status_code == 500
    assert resp.json()["error"] == "Request failed with status code 400"


def test_pay_with_unreadable_body_is_500(client):
    resp = client.post("/pay", content=b"not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 500
    assert "error" in resp.json()
