import pytest
from httpx import AsyncClient

class TestHealthCheck:

    @pytest.mark.asyncio
    async def test_health_check(self, async_client: AsyncClient):
        response = await async_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data
        assert "timestamp" in data
        assert data["features"]["schedules"] is True
        assert data["features"]["events"] is True

    @pytest.mark.asyncio
    async def test_health_needs_no_auth(self, async_client: AsyncClient):
        response = await async_client.get("/health", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 200

class TestMiddleware:

    @pytest.mark.asyncio
    async def test_process_time_header(self, async_client: AsyncClient):
        response = await async_client.get("/health")

        assert float(response.headers["x-process-time"]) >= 0

    @pytest.mark.asyncio
    async def test_no_security_headers_outside_production(self, async_client: AsyncClient):
        response = await async_client.get("/health")

        assert "x-frame-options" not in response.headers

    @pytest.mark.asyncio
    async def test_cors_preflight_for_schedule_save(self, async_client: AsyncClient):
        response = await async_client.options(
            "/api/schedule",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"

class TestAPIDocumentation:

    @pytest.mark.asyncio
    async def test_openapi_lists_scheduling_routes(self, async_client: AsyncClient):
        response = await async_client.get("/api/openapi.json")

        assert response.status_code == 200
        paths = response.json()["paths"]
        assert "/api/schedule" in paths
        assert "/api/schedule/validate" in paths
        assert "/api/events/{event_id}" in paths

    @pytest.mark.asyncio
    async def test_docs_redirect(self, async_client: AsyncClient):
        response = await async_client.get("/docs", follow_redirects=False)

        assert response.status_code in [200, 307, 308]
