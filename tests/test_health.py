from datetime import datetime

from fastapi.testclient import TestClient
from staffhub.main import app


def test_health_ok():
    """Test health check endpoint"""
    client = TestClient(app)
    r = client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert datetime.fromisoformat(body["timestamp"]).tzinfo is not None


def test_root_endpoint():
    """Test root endpoint"""
    client = TestClient(app)
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "StaffHub Backend"
    assert data["status"] == "ok"
    assert data["graphql"] == "/graphql"
    assert "health" in data
