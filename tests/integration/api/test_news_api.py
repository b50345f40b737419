"""Integration tests for News API."""

from typing import Any

import pytest
from httpx import AsyncClient

from tests.conftest import bearer


async def _create(client: AsyncClient, user_id: int, **overrides: Any) -> dict[str, Any]:
    body: dict[str, Any] = {
        "title": "Elevator maintenance",
        "content": "Building B elevator is out Monday morning.",
    }
    body.update(overrides)
    response = await client.post("/api/v1/news", json=body, headers=bearer(user_id))
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestNewsAPI:
    @pytest.mark.asyncio
    async def test_create_defaults_to_notice(self, client: AsyncClient, admin_id: int) -> None:
        data = await _create(client, admin_id)

        assert data["priority"] == "notice"
        assert data["is_published"] is True
        assert data["view_count"] == 0

    @pytest.mark.asyncio
    async def test_create_with_priority(self, client: AsyncClient, admin_id: int) -> None:
        data = await _create(client, admin_id, priority="important")

        assert data["priority"] == "important"

    @pytest.mark.asyncio
    async def test_invalid_priority(self, client: AsyncClient, admin_id: int) -> None:
        response = await client.post(
            "/api/v1/news",
            json={"title": "t", "content": "c", "priority": "urgent"},
            headers=bearer(admin_id),
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_PRIORITY"

    @pytest.mark.asyncio
    async def test_list_only_published(self, client: AsyncClient, admin_id: int) -> None:
        await _create(client, admin_id, title="Public")
        await _create(client, admin_id, title="Draft", is_published=False)

        response = await client.get("/api/v1/news")

        body = response.json()
        assert [n["title"] for n in body["data"]] == ["Public"]
        assert body["pagination"]["totalPages"] == 1

    @pytest.mark.asyncio
    async def test_oversized_limit_is_clamped(self, client: AsyncClient, admin_id: int) -> None:
        await _create(client, admin_id)

        response = await client.get("/api/v1/news", params={"limit": 500})

        assert response.status_code == 200
        assert response.json()["pagination"]["limit"] == 100

    @pytest.mark.asyncio
    async def test_page_zero_rejected(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/news", params={"page": 0})

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_views(self, client: AsyncClient, admin_id: int) -> None:
        data = await _create(client, admin_id)

        response = await client.post(f"/api/v1/news/{data['id']}/views")

        assert response.json()["data"]["view_count"] == 1

    @pytest.mark.asyncio
    async def test_update_by_non_author(
        self, client: AsyncClient, admin_id: int, user_id: int
    ) -> None:
        data = await _create(client, admin_id)

        response = await client.put(
            f"/api/v1/news/{data['id']}", json={"title": "Fake news"}, headers=bearer(user_id)
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_delete(self, client: AsyncClient, admin_id: int) -> None:
        data = await _create(client, admin_id)

        response = await client.delete(f"/api/v1/news/{data['id']}", headers=bearer(admin_id))

        assert response.status_code == 200
        assert (await client.get(f"/api/v1/news/{data['id']}")).status_code == 404


class TestNewsUpdateValidation:
    @pytest.mark.asyncio
    async def test_null_published_flag_rejected(
        self, client: AsyncClient, admin_id: int
    ) -> None:
        news = await _create(client, admin_id)

        response = await client.put(
            f"/api/v1/news/{news['id']}",
            json={"is_published": None},
            headers=bearer(admin_id),
        )

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "is_published"

        detail = await client.get(f"/api/v1/news/{news['id']}")
        assert detail.json()["data"]["is_published"] is True
