"""Integration tests for ids and tokens outside the storable integer range."""

import pytest
from httpx import AsyncClient

from tests.conftest import bearer

HUGE_ID = "99999999999999999999"
POST_BODY = {"title": "Hello", "content": "First post"}


class TestTokenBounds:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "token",
        [HUGE_ID, "2147483648", "0", f"jwt_token_{HUGE_ID}_1700000000000"],
    )
    async def test_out_of_range_token(self, client: AsyncClient, token: str) -> None:
        response = await client.post(
            "/api/v1/community/posts",
            json=POST_BODY,
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == 401
        assert response.json()["error_code"] == "INVALID_TOKEN"

    @pytest.mark.asyncio
    async def test_non_ascii_digit_token(self, client: AsyncClient) -> None:
        # Header values travel as latin-1; "²" is a digit to str.isdigit()
        response = await client.post(
            "/api/v1/community/posts",
            json=POST_BODY,
            headers={"Authorization": "Bearer ²".encode("latin-1")},
        )

        assert response.status_code == 401
        assert response.json()["error_code"] == "INVALID_TOKEN"

    @pytest.mark.asyncio
    async def test_valid_token_still_accepted(self, client: AsyncClient, user_id: int) -> None:
        response = await client.post(
            "/api/v1/community/posts", json=POST_BODY, headers=bearer(user_id)
        )

        assert response.status_code == 201


class TestPathIdBounds:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "path",
        [
            "/api/v1/activities/{id}",
            "/api/v1/activities/{id}/participants",
            "/api/v1/news/{id}",
            "/api/v1/community/posts/{id}",
            "/api/v1/volunteer/posts/{id}",
            "/api/v1/profiles/{id}",
            "/api/v1/images/{id}",
        ],
    )
    @pytest.mark.parametrize("value", [HUGE_ID, "2147483648", "0"])
    async def test_rejected_before_lookup(
        self, client: AsyncClient, path: str, value: str
    ) -> None:
        response = await client.get(path.format(id=value))

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_largest_id_is_a_plain_miss(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/news/2147483647")

        assert response.status_code == 404
        assert response.json()["error_code"] == "NEWS_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_oversized_page(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/news", params={"page": HUGE_ID})

        assert response.status_code == 400
