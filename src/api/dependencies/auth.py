"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.dependencies.database import UowFactory, get_uow_factory
from core.exceptions import AuthenticationError, ErrorCode
from domain.entities.user import Actor
from infrastructure.auth.token_provider import TokenAuthProvider

# Security scheme for OpenAPI docs
security = HTTPBearer(auto_error=False)


def get_auth_provider(uow_factory: UowFactory = Depends(get_uow_factory)) -> TokenAuthProvider:
    """Auth provider bound to the application's database."""
    return TokenAuthProvider(uow_factory)


async def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
    auth_provider: TokenAuthProvider = Depends(get_auth_provider),
) -> Actor:
    """
    Dependency to get the current authenticated user.

    Raises:
        AuthenticationError: If no token provided or token is invalid
    """
    if not credentials:
        raise AuthenticationError(
            message="Authorization header required",
            error_code=ErrorCode.UNAUTHORIZED,
        )

    user = await auth_provider.validate_token(credentials.credentials)

    if not user:
        raise AuthenticationError(
            message="Invalid token or user not found",
            error_code=ErrorCode.INVALID_TOKEN,
        )

    return user


async def get_optional_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
    auth_provider: TokenAuthProvider = Depends(get_auth_provider),
) -> Actor | None:
    """
    Dependency to get the current user if authenticated.

    Returns:
        Actor if authenticated, None otherwise (no exception raised)
    """
    if not credentials:
        return None

    return await auth_provider.validate_token(credentials.credentials)


# Type alias for convenience in route handlers
CurrentUser = Annotated[Actor, Depends(get_current_user)]
OptionalUser = Annotated[Actor | None, Depends(get_optional_user)]
