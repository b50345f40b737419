"""Authentication provider protocol."""

from typing import Optional, Protocol

from domain.entities.user import Actor, User


class IAuthProvider(Protocol):
    """Protocol for authentication providers."""

    async def validate_token(self, token: str) -> Optional[Actor]:
        """
        Resolve a bearer token to the acting user.

        Args:
            token: The bearer token to validate

        Returns:
            Actor if the token names an existing active user, None otherwise
        """
        ...

    def create_token(self, user: User) -> str:
        """
        Create an authentication token for a user.

        Args:
            user: The user to create a token for

        Returns:
            The generated token string
        """
        ...
