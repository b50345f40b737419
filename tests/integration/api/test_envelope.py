"""Cross-cutting response behavior of the assembled app."""

import pytest
from httpx import AsyncClient


class TestResponseEnvelope:
    @pytest.mark.asyncio
    async def test_preflight_on_any_path(self, client: AsyncClient) -> None:
        response = await client.options("/api/v1/community/posts")

        assert response.status_code == 204
        assert response.headers["access-control-allow-origin"] == "*"
        assert "PUT" in response.headers["access-control-allow-methods"]

    @pytest.mark.asyncio
    async def test_cors_on_success(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/news")

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

    @pytest.mark.asyncio
    async def test_cors_and_envelope_on_error(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/activities/999")

        assert response.status_code == 404
        assert response.headers["access-control-allow-origin"] == "*"
        assert set(response.json()) == {"success", "error", "error_code", "details"}

    @pytest.mark.asyncio
    async def test_unknown_route(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/nowhere")

        assert response.status_code == 404
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_security_and_request_id_headers(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.headers["x-content-type-options"] == "nosniff"
        assert "x-request-id" in response.headers

    @pytest.mark.asyncio
    async def test_empty_list_envelope(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/volunteer/posts")

        assert response.json() == {
            "success": True,
            "data": [],
            "pagination": {"page": 1, "limit": 10, "total": 0, "totalPages": 0},
        }
