"""Unit of Work protocol."""

from typing import Protocol

from domain.repositories.activity_repository import IActivityRepository
from domain.repositories.community_repository import (
    ICommunityCommentRepository,
    ICommunityPostRepository,
)
from domain.repositories.image_repository import IImageRepository
from domain.repositories.news_repository import INewsRepository
from domain.repositories.profile_repository import IInterestRepository, IProfileRepository
from domain.repositories.user_repository import IUserRepository
from domain.repositories.volunteer_repository import IVolunteerPostRepository


class IUnitOfWork(Protocol):
    """Unit of Work interface for managing transactions."""

    users: IUserRepository
    profiles: IProfileRepository
    interests: IInterestRepository
    activities: IActivityRepository
    news: INewsRepository
    community_posts: ICommunityPostRepository
    community_comments: ICommunityCommentRepository
    volunteer_posts: IVolunteerPostRepository
    images: IImageRepository

    async def commit(self) -> None:
        """Commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        ...

    async def __aenter__(self) -> "IUnitOfWork":
        """Enter the context manager."""
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        """Exit the context manager."""
        ...
