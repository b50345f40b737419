"""Community board repository protocols."""

from typing import Protocol

from domain.entities.community import CommunityComment, CommunityPost
from domain.entities.pagination import PageRequest


class ICommunityPostRepository(Protocol):
    """Repository interface for community posts, their media and likes."""

    async def list_published(self, page: PageRequest) -> tuple[list[CommunityPost], int]:
        """Get one page of published posts (newest first) and the total."""
        ...

    async def get(self, id: int) -> CommunityPost | None:
        """Get a post with its media."""
        ...

    async def exists(self, id: int) -> bool:
        """Check whether a post exists."""
        ...

    async def create(self, post: CommunityPost) -> CommunityPost:
        """Create a post together with its media rows."""
        ...

    async def update(self, post: CommunityPost) -> CommunityPost:
        """Update title, content and published flag."""
        ...

    async def delete(self, id: int) -> bool:
        """Delete a post with its media, comments and likes."""
        ...

    async def increment_views(self, id: int) -> None:
        """Add one view."""
        ...

    async def adjust_like_count(self, id: int, delta: int) -> None:
        """Add ``delta`` to like_count."""
        ...

    async def adjust_comment_count(self, id: int, delta: int) -> None:
        """Add ``delta`` to comment_count."""
        ...

    async def has_liked(self, post_id: int, user_id: int) -> bool:
        """Check whether the like row exists."""
        ...

    async def add_like(self, post_id: int, user_id: int) -> None:
        """Insert a like row. Raises DuplicateEntryError if it exists."""
        ...

    async def remove_like(self, post_id: int, user_id: int) -> int:
        """Delete a like row and return the number of rows removed."""
        ...


class ICommunityCommentRepository(Protocol):
    """Repository interface for community comments."""

    async def get(self, id: int) -> CommunityComment | None:
        """Get a comment by ID."""
        ...

    async def list_for_post(self, post_id: int) -> list[CommunityComment]:
        """Get all comments of a post as a flat, oldest-first list."""
        ...

    async def create(self, comment: CommunityComment) -> CommunityComment:
        """Create a comment."""
        ...

    async def delete_with_replies(self, id: int) -> int:
        """Delete a comment and all of its descendants. Returns rows removed."""
        ...
