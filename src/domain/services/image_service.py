"""Image upload and retrieval."""

import base64
import binascii
from collections.abc import Callable, Sequence

import structlog

from core.exceptions import (
    ImageNotFoundError,
    PayloadTooLargeError,
    UnsupportedMediaTypeError,
    ValidationError,
)
from domain.entities.image import Image
from domain.entities.pagination import Page, PageRequest
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

DEFAULT_MIME = "image/jpeg"
DEFAULT_NAME = "uploaded-image"


def decode_base64_payload(payload: str) -> tuple[bytes, str | None]:
    """Decode base64 image data, accepting an optional ``data:<mime>;base64,`` prefix.

    Returns the bytes and the MIME type named by the prefix, if any.
    """
    mime = None
    if payload.startswith("data:") and "," in payload:
        header, payload = payload.split(",", 1)
        mime = header[len("data:"):].split(";", 1)[0] or None
    try:
        return base64.b64decode(payload, validate=True), mime
    except (binascii.Error, ValueError):
        raise ValidationError("File data is not valid base64", field="file") from None


class ImageService:
    """Stores uploaded images in the database and serves them back."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        allowed_types: Sequence[str],
        max_bytes: int,
    ) -> None:
        self._uow_factory = uow_factory
        self._allowed_types = {t.lower() for t in allowed_types}
        self._max_bytes = max_bytes

    @property
    def max_bytes(self) -> int:
        return self._max_bytes

    async def upload(self, data: bytes, name: str | None, mime: str | None) -> Image:
        """Validate and store raw image bytes."""
        if not data:
            raise ValidationError("No file uploaded", field="file")

        mime = (mime or DEFAULT_MIME).lower()
        if mime not in self._allowed_types:
            raise UnsupportedMediaTypeError(mime)
        if len(data) > self._max_bytes:
            raise PayloadTooLargeError(len(data), self._max_bytes)

        async with self._uow_factory() as uow:
            image = await uow.images.create(Image(name=name or DEFAULT_NAME, mime=mime, data=data))
            await uow.commit()

        logger.info("image_uploaded", image_id=image.id, mime=mime, size=image.size)
        return image

    async def upload_base64(
        self, payload: str | None, filename: str | None, mime: str | None
    ) -> Image:
        """Decode a base64 (or data URL) payload and store it."""
        if not payload:
            raise ValidationError("No base64 file data provided", field="file")
        data, prefix_mime = decode_base64_payload(payload)
        return await self.upload(data, filename, mime or prefix_mime)

    async def get(self, image_id: int) -> Image:
        """Get an image including its bytes."""
        async with self._uow_factory() as uow:
            image = await uow.images.get(image_id)
            if not image:
                raise ImageNotFoundError(image_id)
            return image

    async def list_images(self, page: PageRequest) -> Page[Image]:
        """Get one page of image metadata, newest first."""
        async with self._uow_factory() as uow:
            items, total = await uow.images.list_metadata(page)
            return Page(items=items, total=total, page=page.page, limit=page.limit)
