"""Volunteer repository protocol."""

from typing import Protocol

from domain.entities.pagination import PageRequest
from domain.entities.volunteer import VolunteerPost


class IVolunteerPostRepository(Protocol):
    """Repository interface for volunteer posts and their supports."""

    async def list_recent(self, page: PageRequest) -> tuple[list[VolunteerPost], int]:
        """Get one page of posts (newest first) and the total."""
        ...

    async def get(self, id: int) -> VolunteerPost | None:
        """Get a post by ID."""
        ...

    async def create(self, post: VolunteerPost) -> VolunteerPost:
        """Create a post."""
        ...

    async def update(self, post: VolunteerPost) -> VolunteerPost:
        """Update a post."""
        ...

    async def delete(self, id: int) -> bool:
        """Delete a post with its supports."""
        ...

    async def has_supported(self, post_id: int, user_id: int) -> bool:
        """Check whether the support row exists."""
        ...

    async def add_support(self, post_id: int, user_id: int) -> None:
        """Insert a support row. Raises DuplicateEntryError if it exists."""
        ...

    async def remove_support(self, post_id: int, user_id: int) -> int:
        """Delete a support row and return the number of rows removed."""
        ...

    async def adjust_support_count(self, id: int, delta: int) -> None:
        """Add ``delta`` to support_count."""
        ...
