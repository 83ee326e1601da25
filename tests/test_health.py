"""
Tests for service-level endpoints and response middleware
"""
import pytest

from cms_backend.core.rate_limit import limiter


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["components"]["database"]["status"] == "healthy"


def test_liveness(client):
    assert client.get("/health/live").json() == {"status": "alive"}


def test_api_index(client):
    response = client.get("/api")
    assert response.status_code == 200
    assert response.json()["endpoints"]["blogs"] == "/api/blogs"


def test_unknown_route_uses_envelope(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Route not found"}


@pytest.mark.parametrize("path", ["/health", "/api/blogs", "/api/nothing-here"])
def test_security_headers_on_every_response(client, path):
    response = client.get(path)
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert "Strict-Transport-Security" in response.headers


def test_service_routes_are_not_rate_limited():
    for name in ("root", "health", "readiness", "liveness"):
        assert f"cms_backend.main.{name}" in limiter._exempt_routes
    assert "cms_backend.api.blogs.list_blogs" not in limiter._exempt_routes
