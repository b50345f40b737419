"""User repository protocol."""

from typing import Protocol

from domain.entities.user import AuthorSummary, User


class IUserRepository(Protocol):
    """Repository interface for User entities."""

    async def get(self, id: int) -> User | None:
        """Get a user by ID."""
        ...

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by email."""
        ...

    async def create(self, user: User) -> User:
        """Create a new user."""
        ...

    async def get_author(self, id: int) -> AuthorSummary | None:
        """Get the public name/avatar of a user."""
        ...
