import pytest
from fastapi.testclient import TestClient

from trustlens.main import create_app


@pytest.fixture
def client(offline_settings):
    return TestClient(create_app(offline_settings))


def test_healthz(client):
    res = client.get("/healthz")
    assert res.status_code == 200
    assert res.json() == {"ok": True, "live": False}


def test_analyze_offline(client):
    res = client.post("/analyze", json={"url": "https://www.amazon.com/deal-xyz"})
    assert res.status_code == 200
    body = res.json()
    assert body["verdict"] == "Genuine"
    assert body["trust_score"] == 92
    assert body["sources"] == []
    assert body["url"] == "https://www.amazon.com/deal-xyz"
    assert set(body["breakdown"]) == {"reviews", "sentiment", "price", "seller", "description"}


def test_analyze_rejects_empty_url(client):
    res = client.post("/analyze", json={"url": ""})
    assert res.status_code == 422
