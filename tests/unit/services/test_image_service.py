"""Unit tests for Image service layer."""

import base64

import pytest

from core.exceptions import (
    ImageNotFoundError,
    PayloadTooLargeError,
    UnsupportedMediaTypeError,
    ValidationError,
)
from domain.services.image_service import ImageService, decode_base64_payload

from tests.unit.conftest import FakeUnitOfWork

PNG_HEADER = b"\x89PNG\r\n\x1a\n"


@pytest.fixture
def service(uow: FakeUnitOfWork) -> ImageService:
    uow.images.create.side_effect = lambda image: image
    return ImageService(lambda: uow, allowed_types=["image/png", "image/jpeg"], max_bytes=1024)


class TestDecodeBase64:
    def test_plain_base64(self) -> None:
        data, mime = decode_base64_payload(base64.b64encode(PNG_HEADER).decode())

        assert data == PNG_HEADER
        assert mime is None

    def test_data_url_prefix(self) -> None:
        payload = "data:image/png;base64," + base64.b64encode(PNG_HEADER).decode()

        data, mime = decode_base64_payload(payload)

        assert data == PNG_HEADER
        assert mime == "image/png"

    def test_garbage(self) -> None:
        with pytest.raises(ValidationError):
            decode_base64_payload("not base64 at all!")


class TestUpload:
    @pytest.mark.asyncio
    async def test_stores_bytes(self, service: ImageService, uow: FakeUnitOfWork) -> None:
        image = await service.upload(PNG_HEADER, "cat.png", "image/png")

        assert image.size == len(PNG_HEADER)
        assert image.name == "cat.png"
        assert uow.committed

    @pytest.mark.asyncio
    async def test_defaults_to_jpeg(self, service: ImageService) -> None:
        image = await service.upload(b"\xff\xd8\xff", None, None)

        assert image.mime == "image/jpeg"
        assert image.name == "uploaded-image"

    @pytest.mark.asyncio
    async def test_empty(self, service: ImageService, uow: FakeUnitOfWork) -> None:
        with pytest.raises(ValidationError):
            await service.upload(b"", "x.png", "image/png")

        uow.images.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_wrong_type(self, service: ImageService) -> None:
        with pytest.raises(UnsupportedMediaTypeError) as exc_info:
            await service.upload(b"hello", "notes.txt", "text/plain")

        assert exc_info.value.status_code == 415

    @pytest.mark.asyncio
    async def test_too_large(self, service: ImageService, uow: FakeUnitOfWork) -> None:
        with pytest.raises(PayloadTooLargeError) as exc_info:
            await service.upload(b"\0" * 1025, "big.png", "image/png")

        assert exc_info.value.status_code == 413
        uow.images.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_base64_uses_prefix_mime(self, service: ImageService) -> None:
        payload = "data:image/png;base64," + base64.b64encode(PNG_HEADER).decode()

        image = await service.upload_base64(payload, "cat.png", None)

        assert image.mime == "image/png"
        assert image.data == PNG_HEADER

    @pytest.mark.asyncio
    async def test_base64_missing(self, service: ImageService) -> None:
        with pytest.raises(ValidationError):
            await service.upload_base64(None, None, None)


@pytest.mark.asyncio
async def test_get_missing(service: ImageService, uow: FakeUnitOfWork) -> None:
    uow.images.get.return_value = None

    with pytest.raises(ImageNotFoundError):
        await service.get(404)
