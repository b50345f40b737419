"""SQLAlchemy Unit of Work implementation."""

from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.repositories.sqlalchemy_activity_repo import SQLAlchemyActivityRepository
from infrastructure.database.repositories.sqlalchemy_community_repo import (
    SQLAlchemyCommunityCommentRepository,
    SQLAlchemyCommunityPostRepository,
)
from infrastructure.database.repositories.sqlalchemy_image_repo import SQLAlchemyImageRepository
from infrastructure.database.repositories.sqlalchemy_news_repo import SQLAlchemyNewsRepository
from infrastructure.database.repositories.sqlalchemy_profile_repo import (
    SQLAlchemyInterestRepository,
    SQLAlchemyProfileRepository,
)
from infrastructure.database.repositories.sqlalchemy_user_repo import SQLAlchemyUserRepository
from infrastructure.database.repositories.sqlalchemy_volunteer_repo import SQLAlchemyVolunteerPostRepository


class SQLAlchemyUnitOfWork:
    """Unit of Work implementation using SQLAlchemy."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None

    @property
    def session(self) -> AsyncSession:
        """The open session. Only valid inside the context manager."""
        if not self._session:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return self._session

    @property
    def users(self) -> SQLAlchemyUserRepository:
        """Get user repository."""
        return SQLAlchemyUserRepository(self.session)

    @property
    def profiles(self) -> SQLAlchemyProfileRepository:
        """Get profile repository."""
        return SQLAlchemyProfileRepository(self.session)

    @property
    def interests(self) -> SQLAlchemyInterestRepository:
        """Get interest repository."""
        return SQLAlchemyInterestRepository(self.session)

    @property
    def activities(self) -> SQLAlchemyActivityRepository:
        """Get activity repository."""
        return SQLAlchemyActivityRepository(self.session)

    @property
    def news(self) -> SQLAlchemyNewsRepository:
        """Get news repository."""
        return SQLAlchemyNewsRepository(self.session)

    @property
    def community_posts(self) -> SQLAlchemyCommunityPostRepository:
        """Get community post repository."""
        return SQLAlchemyCommunityPostRepository(self.session)

    @property
    def community_comments(self) -> SQLAlchemyCommunityCommentRepository:
        """Get community comment repository."""
        return SQLAlchemyCommunityCommentRepository(self.session)

    @property
    def volunteer_posts(self) -> SQLAlchemyVolunteerPostRepository:
        """Get volunteer post repository."""
        return SQLAlchemyVolunteerPostRepository(self.session)

    @property
    def images(self) -> SQLAlchemyImageRepository:
        """Get image repository."""
        return SQLAlchemyImageRepository(self.session)

    async def commit(self) -> None:
        """Commit the current transaction."""
        if self._session:
            await self._session.commit()

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        if self._session:
            await self._session.rollback()

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        """Enter the context manager and create session."""
        self._session = self._session_factory()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[Exception],
        exc_tb: Any,
    ) -> None:
        """Exit the context manager and cleanup."""
        if self._session:
            if exc_type:
                await self.rollback()
            await self._session.close()
            self._session = None
