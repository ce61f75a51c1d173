"""Tests for health check API endpoints."""

from flask.testing import FlaskClient

from tests.testing_utils import FakeInventorySource


class TestHealthEndpoints:
    """Test health check endpoints for Kubernetes probes."""

    def test_healthz_always_returns_200(self, client: FlaskClient):
        """Test liveness probe always returns 200."""
        response = client.get("/api/health/healthz")

        assert response.status_code == 200
        assert response.json["status"] == "alive"
        assert response.json["ready"] is True

    def test_healthz_does_not_contact_backend(self, client: FlaskClient, fake_source: FakeInventorySource):
        fake_source.unavailable = True

        response = client.get("/api/health/healthz")

        assert response.status_code == 200
        assert fake_source.calls == []
