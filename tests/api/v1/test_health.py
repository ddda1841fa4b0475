"""
Tests for health check endpoints.
"""
from datetime import datetime

from sptable.core import settings


class TestHealthEndpoints:
    """Tests for /v1/health and /v1/ping."""

    def test_health_check(self, client):
        """Health check reports service name and version."""
        response = client.get(f"{settings.API_V1_PREFIX}/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == settings.APP_NAME
        assert data["version"] == settings.APP_VERSION
        assert datetime.fromisoformat(data["timestamp"]).tzinfo is not None

    def test_ping(self, client):
        """Ping answers pong."""
        response = client.get(f"{settings.API_V1_PREFIX}/ping")

        assert response.status_code == 200
        assert response.json() == {"message": "pong"}

    def test_root(self, client):
        """The root endpoint points at the docs."""
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["docs"] == f"{settings.API_V1_PREFIX}/docs"
