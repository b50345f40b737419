"""News repository protocol."""

from typing import Protocol

from domain.entities.news import News
from domain.entities.pagination import PageRequest


class INewsRepository(Protocol):
    """Repository interface for News entities."""

    async def list_published(self, page: PageRequest) -> tuple[list[News], int]:
        """Get one page of published news (newest first) and the total."""
        ...

    async def get(self, id: int) -> News | None:
        """Get a news item by ID."""
        ...

    async def create(self, news: News) -> News:
        """Create a news item."""
        ...

    async def update(self, news: News) -> News:
        """Update a news item."""
        ...

    async def delete(self, id: int) -> bool:
        """Delete a news item."""
        ...

    async def increment_views(self, id: int) -> bool:
        """Add one view. Returns False if the item does not exist."""
        ...
