"""
Tests for cross-origin handling with a restricted origin list.
"""
import httpx
import pytest
from fastapi.testclient import TestClient
from mooddiary.main import create_app
from mooddiary.core.config import settings
from mooddiary.api.dependencies import get_gateway_client

ALLOWED_ORIGIN = "http://localhost:5173"
FOREIGN_ORIGIN = "https://diary.example"
ANALYZE = "/api/analyze-mood"


def preflight_headers(origin: str) -> dict:
    return {
        "Origin": origin,
        "Access-Control-Request-Method": "POST",
        "Access-Control-Request-Headers": "content-type, authorization",
    }


@pytest.fixture
def restricted_client(monkeypatch, gateway):
    """Client for an app built with a specific CORS origin list."""
    monkeypatch.setattr(settings, "CORS_ORIGINS", [ALLOWED_ORIGIN, "http://localhost:8080"])
    restricted_app = create_app()

    async def override_gateway_client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(gateway.handler)) as client:
            yield client

    restricted_app.dependency_overrides[get_gateway_client] = override_gateway_client
    return TestClient(restricted_app)


def test_analysis_preflight_from_any_origin(restricted_client):
    """Test a browser pre-flight from an unlisted origin reaches the endpoint."""
    response = restricted_client.options(ANALYZE, headers=preflight_headers(FOREIGN_ORIGIN))
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert "content-type" in response.headers["access-control-allow-headers"]
    assert "authorization" in response.headers["access-control-allow-headers"]


def test_analysis_error_from_any_origin(restricted_client, gateway):
    response = restricted_client.post(ANALYZE, json={"content": " "}, headers={"Origin": FOREIGN_ORIGIN})
    assert response.status_code == 400
    assert response.json() == {"error": "Content is required"}
    assert response.headers["access-control-allow-origin"] == "*"
    assert gateway.call_count == 0


def test_analysis_success_from_any_origin(restricted_client, gateway):
    response = restricted_client.post(
        ANALYZE, json={"content": "Walked by the sea."}, headers={"Origin": FOREIGN_ORIGIN}
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert gateway.call_count == 1


def test_other_routes_keep_origin_list(restricted_client):
    """Test the configured origin list still applies outside the analysis endpoint."""
    response = restricted_client.options("/api/entries", headers=preflight_headers(FOREIGN_ORIGIN))
    assert response.status_code == 400
    assert "access-control-allow-origin" not in response.headers

    response = restricted_client.options("/api/entries", headers=preflight_headers(ALLOWED_ORIGIN))
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN
