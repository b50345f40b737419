"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock

import pytest

from domain.entities.user import Actor, UserRole


class FakeUnitOfWork:
    """Fake Unit of Work with all repository mocks for unit testing."""

    def __init__(self) -> None:
        self.users = AsyncMock()
        self.profiles = AsyncMock()
        self.interests = AsyncMock()
        self.activities = AsyncMock()
        self.news = AsyncMock()
        self.community_posts = AsyncMock()
        self.community_comments = AsyncMock()
        self.volunteer_posts = AsyncMock()
        self.images = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def actor() -> Actor:
    """A regular user acting on their own resources."""
    return Actor(id=1, email="alice@example.com")


@pytest.fixture
def stranger() -> Actor:
    """A regular user who owns nothing."""
    return Actor(id=2, email="bob@example.com")


@pytest.fixture
def admin() -> Actor:
    """An administrator."""
    return Actor(id=99, email="admin@example.com", role=UserRole.ADMIN)
