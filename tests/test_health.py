"""
Testes dos endpoints de health check
"""
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient
from app.main import app

client = TestClient(app)


def test_root():
    assert client.get("/").status_code == 200


def test_health():
    assert client.get("/health").json() == {"status": "healthy"}


def test_ready():
    assert client.get("/health/ready").json() == {"status": "ready"}


def test_detailed_degraded_without_redis():
    with patch("app.main.get_redis", new=AsyncMock(side_effect=ConnectionError("down"))):
        response = client.get("/health/detailed")

    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "degraded"
    assert data["checks"]["database"] == "ok"
    assert data["checks"]["redis"].startswith("error")
