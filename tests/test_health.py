"""Smoke tests for health and app wiring."""

from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data.get("status") == "ok"
    assert data.get("version")


async def test_request_id_echoed(client: AsyncClient) -> None:
    """X-Request-ID from the caller is returned on the response."""
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "req-abc-123"})
    assert response.headers.get("x-request-id") == "req-abc-123"


async def test_openapi_lists_assessment_routes(client: AsyncClient) -> None:
    response = await client.get("/openapi.json")
    assert response.status_code == 200
    paths = response.json()["paths"]
    assert "/api/v1/assessments/{assessment_id}/generation" in paths
    assert "/api/v1/callbacks/generation" in paths
