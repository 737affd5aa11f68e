"""Smoke tests for health and app wiring."""

from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200, status ok and the app version."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data.get("status") == "ok"
    assert data.get("version")


async def test_root_points_to_docs(client: AsyncClient) -> None:
    """GET / returns the service name and docs location."""
    response = await client.get("/")
    assert response.status_code == 200
    assert response.json()["docs"] == "/docs"


async def test_request_id_is_echoed(client: AsyncClient) -> None:
    """A well-formed X-Request-ID is returned unchanged on the response."""
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "req-123"})
    assert response.headers.get("X-Request-ID") == "req-123"


async def test_unsafe_request_id_is_replaced(client: AsyncClient) -> None:
    """A request id with unsafe characters is replaced by a generated one."""
    response = await client.get(
        "/api/v1/health", headers={"X-Request-ID": "bad id with spaces"}
    )
    returned = response.headers.get("X-Request-ID")
    assert returned
    assert returned != "bad id with spaces"
