"""Tests for health check endpoints."""

from unittest.mock import patch
from fastapi.testclient import TestClient

from api import app


client = TestClient(app)


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self):
        """Health endpoint should return 200 with status."""
        response = client.get("/api/health")
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["status"] == "healthy"
        assert body["data"]["version"] == "0.1.0"

    def test_health_envelope_structure(self):
        response = client.get("/api/health")
        body = response.json()
        assert set(body.keys()) == {"success", "data", "requestId", "timestamp"}
        assert response.headers["X-Request-ID"] == body["requestId"]

    def test_request_id_is_echoed(self):
        response = client.get("/api/health", headers={"X-Request-ID": "req_1_abc"})
        assert response.headers["X-Request-ID"] == "req_1_abc"
        assert response.json()["requestId"] == "req_1_abc"

    @patch("api.routes.health.is_database_configured", return_value=True)
    def test_readiness_check(self, _):
        response = client.get("/api/ready")
        assert response.status_code == 200
        data = response.json()["data"]
        assert data == {"status": "ready", "database": "configured"}

    @patch("api.routes.health.is_database_configured", return_value=False)
    def test_readiness_not_configured(self, _):
        response = client.get("/api/ready")
        assert response.status_code == 503
        body = response.json()
        assert body["data"]["status"] == "not_ready"
        assert "requestId" in body
