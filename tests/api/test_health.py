"""
Test suite for health check endpoint.

System role: Verification of health HTTP API
"""

from fastapi.testclient import TestClient


class TestHealthEndpoint:
    def test_health_returns_healthy(self, client: TestClient) -> None:
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "message": "Server Healthy"}

    def test_health_needs_no_token(self, client: TestClient, identity_resolver) -> None:
        client.get("/api/health")

        assert identity_resolver.tokens == []

    def test_correlation_id_is_echoed(self, client: TestClient) -> None:
        response = client.get("/api/health", headers={"X-Correlation-ID": "abc-123"})

        assert response.headers["X-Correlation-ID"] == "abc-123"

    def test_correlation_id_is_generated(self, client: TestClient) -> None:
        response = client.get("/api/health")

        assert response.headers["X-Correlation-ID"]
