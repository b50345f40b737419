"""Placeholder bearer-token authentication.

Tokens are either a bare numeric user id (``"42"``) or the mock login format
``jwt_token_<user_id>_<timestamp>``. Nothing is signed: the user id is parsed
and looked up in the database. Swap this provider for a real one before
exposing the API publicly.
"""

import time
from typing import Callable, Optional

import structlog

from domain.entities.user import Actor, User, UserStatus
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.database.models import MAX_ROW_ID

logger = structlog.get_logger()

TOKEN_PREFIX = "jwt_token_"


def _as_user_id(text: str) -> Optional[int]:
    # isdigit() alone accepts non-ASCII digits such as "²".
    if not (text.isascii() and text.isdigit()):
        return None
    value = int(text)
    if not 1 <= value <= MAX_ROW_ID:
        return None
    return value


def parse_user_id(token: str) -> Optional[int]:
    """Extract the user id from a token, or None if it is malformed."""
    token = token.strip()
    if token.startswith(TOKEN_PREFIX):
        parts = token.split("_")
        # ["jwt", "token", "<id>", "<timestamp>"]
        if len(parts) >= 3:
            return _as_user_id(parts[2])
        return None

    return _as_user_id(token)


class TokenAuthProvider:
    """Resolves placeholder tokens against the users table."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def validate_token(self, token: str) -> Optional[Actor]:
        """Return the actor named by the token, or None."""
        user_id = parse_user_id(token)
        if user_id is None:
            logger.info("auth_token_malformed")
            return None

        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)

        if not user or user.id is None:
            logger.info("auth_user_not_found", user_id=user_id)
            return None
        if user.status != UserStatus.ACTIVE:
            logger.info("auth_user_inactive", user_id=user_id, status=user.status.value)
            return None

        return Actor(id=user.id, email=user.email, role=user.role)

    def create_token(self, user: User) -> str:
        """Create a token in the mock login format."""
        return f"{TOKEN_PREFIX}{user.id}_{int(time.time() * 1000)}"
