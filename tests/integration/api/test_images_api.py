"""Integration tests for Images API."""

import base64
import os

import pytest
from httpx import AsyncClient

PNG_HEADER = b"\x89PNG\r\n\x1a\n"


def _png(size: int) -> bytes:
    return PNG_HEADER + os.urandom(size - len(PNG_HEADER))


class TestImageUpload:
    @pytest.mark.asyncio
    async def test_multipart_round_trip(self, client: AsyncClient) -> None:
        """A 2MB PNG comes back byte-identical with its content type."""
        payload = _png(2 * 1024 * 1024)

        response = await client.post(
            "/api/v1/images", files={"file": ("garden.png", payload, "image/png")}
        )

        assert response.status_code == 201, response.text
        data = response.json()["data"]
        assert data["mime"] == "image/png"
        assert data["file_size"] == len(payload)

        served = await client.get(f"/api/v1/images/{data['id']}")
        assert served.status_code == 200
        assert served.headers["content-type"] == "image/png"
        assert served.headers["cache-control"] == "public, max-age=60"
        assert served.headers["content-disposition"] == 'inline; filename="garden.png"'
        assert served.content == payload

    @pytest.mark.asyncio
    async def test_image_field_name(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/images", files={"image": ("a.jpg", b"\xff\xd8\xff\xe0", "image/jpeg")}
        )

        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_too_large(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/images", files={"file": ("huge.png", _png(9 * 1024 * 1024), "image/png")}
        )

        assert response.status_code == 413
        body = response.json()
        assert body["error_code"] == "PAYLOAD_TOO_LARGE"
        assert body["details"] == {"size": 8 * 1024 * 1024 + 1, "max_size": 8 * 1024 * 1024}

    @pytest.mark.asyncio
    async def test_wrong_type(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/images", files={"file": ("notes.txt", b"hello", "text/plain")}
        )

        assert response.status_code == 415
        assert response.json()["error_code"] == "UNSUPPORTED_MEDIA_TYPE"

    @pytest.mark.asyncio
    async def test_no_file(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/images", data={"note": "nothing here"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_base64_json(self, client: AsyncClient) -> None:
        payload = _png(256)

        response = await client.post(
            "/api/v1/images",
            json={
                "file": "data:image/png;base64," + base64.b64encode(payload).decode(),
                "filename": "tiny.png",
            },
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["mime"] == "image/png"
        served = await client.get(f"/api/v1/images/{data['id']}")
        assert served.content == payload

    @pytest.mark.asyncio
    async def test_base64_invalid(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/images", json={"file": "%%%not-base64%%%"})

        assert response.status_code == 400


class TestImageListing:
    @pytest.mark.asyncio
    async def test_list_metadata(self, client: AsyncClient) -> None:
        for name in ("one.png", "two.png"):
            await client.post("/api/v1/images", files={"file": (name, _png(64), "image/png")})

        response = await client.get("/api/v1/images")

        assert response.status_code == 200
        body = response.json()
        assert body["pagination"]["total"] == 2
        assert body["pagination"]["limit"] == 50
        assert {img["name"] for img in body["data"]} == {"one.png", "two.png"}
        assert all(img["file_size"] == 64 for img in body["data"])

    @pytest.mark.asyncio
    async def test_missing_image(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/images/999")

        assert response.status_code == 404
        assert response.json()["error_code"] == "IMAGE_NOT_FOUND"
