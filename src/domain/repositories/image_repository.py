"""Image repository protocol."""

from typing import Protocol

from domain.entities.image import Image
from domain.entities.pagination import PageRequest


class IImageRepository(Protocol):
    """Repository interface for stored images."""

    async def create(self, image: Image) -> Image:
        """Store an image."""
        ...

    async def get(self, id: int) -> Image | None:
        """Get an image including its bytes."""
        ...

    async def list_metadata(self, page: PageRequest) -> tuple[list[Image], int]:
        """Get one page of images (newest first, without bytes) and the total."""
        ...
