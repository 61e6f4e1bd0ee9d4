"""Tests for main application endpoints."""

from fastapi.testclient import TestClient


def test_health_check(client: TestClient) -> None:
    """Test health check endpoint."""
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "energydash"


def test_openapi_lists_routes(client: TestClient) -> None:
    """Test the documented API exposes the admin resources."""
    paths = client.get("/openapi.json").json()["paths"]
    assert "/api/preferences" in paths
    assert "/api/conversions/cik" in paths
    assert "/api/meters/{meter_id}/readings" in paths
