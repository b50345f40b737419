"""SQLAlchemy implementation of Volunteer repository."""

from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import DuplicateEntryError
from domain.entities.pagination import PageRequest
from domain.entities.volunteer import VolunteerPost
from infrastructure.database.errors import is_unique_violation
from infrastructure.database.models import VolunteerPostModel, VolunteerSupportModel
from infrastructure.database.repositories.sqlalchemy_user_repo import (
    author_from_row,
    select_with_author,
)


class SQLAlchemyVolunteerPostRepository:
    """SQLAlchemy implementation of IVolunteerPostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_recent(self, page: PageRequest) -> tuple[list[VolunteerPost], int]:
        """Get one page of posts (newest first) and the total."""
        total = (
            await self._session.execute(select(func.count()).select_from(VolunteerPostModel))
        ).scalar_one()

        stmt = (
            select_with_author(VolunteerPostModel, VolunteerPostModel.user_id)
            .order_by(VolunteerPostModel.created_at.desc(), VolunteerPostModel.id.desc())
            .offset(page.offset)
            .limit(page.limit)
        )
        result = await self._session.execute(stmt)
        return [self._row_to_entity(row) for row in result], total

    async def get(self, id: int) -> VolunteerPost | None:
        """Get a post by ID."""
        stmt = select_with_author(VolunteerPostModel, VolunteerPostModel.user_id).where(
            VolunteerPostModel.id == id
        )
        row = (await self._session.execute(stmt)).first()
        return self._row_to_entity(row) if row else None

    async def create(self, post: VolunteerPost) -> VolunteerPost:
        """Create a post."""
        model = VolunteerPostModel(
            title=post.title,
            description=post.description,
            date_time=post.date_time,
            reward=post.reward,
            user_id=post.user_id,
            support_count=post.support_count,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        created = await self.get(model.id)
        if not created:
            raise ValueError(f"Volunteer post {model.id} not found after flush")
        return created

    async def update(self, post: VolunteerPost) -> VolunteerPost:
        """Update a post."""
        model = await self._session.get(VolunteerPostModel, post.id)
        if not model:
            raise ValueError(f"Volunteer post {post.id} not found")

        model.title = post.title
        model.description = post.description
        model.date_time = post.date_time
        model.reward = post.reward
        model.updated_at = post.updated_at

        await self._session.flush()
        updated = await self.get(model.id)
        if not updated:
            raise ValueError(f"Volunteer post {model.id} not found after flush")
        return updated

    async def delete(self, id: int) -> bool:
        """Delete a post with its supports."""
        await self._session.execute(
            delete(VolunteerSupportModel).where(VolunteerSupportModel.post_id == id)
        )
        result = await self._session.execute(
            delete(VolunteerPostModel).where(VolunteerPostModel.id == id)
        )
        return bool(result.rowcount)

    async def has_supported(self, post_id: int, user_id: int) -> bool:
        """Check whether the support row exists."""
        stmt = select(VolunteerSupportModel.id).where(
            VolunteerSupportModel.post_id == post_id,
            VolunteerSupportModel.user_id == user_id,
        )
        return (await self._session.execute(stmt)).first() is not None

    async def add_support(self, post_id: int, user_id: int) -> None:
        """Insert a support row. Raises DuplicateEntryError if it exists."""
        self._session.add(VolunteerSupportModel(post_id=post_id, user_id=user_id))
        try:
            await self._session.flush()
        except IntegrityError as e:
            if is_unique_violation(e):
                raise DuplicateEntryError("volunteer support") from e
            raise

    async def remove_support(self, post_id: int, user_id: int) -> int:
        """Delete a support row and return the number of rows removed."""
        stmt = delete(VolunteerSupportModel).where(
            VolunteerSupportModel.post_id == post_id,
            VolunteerSupportModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        return result.rowcount

    async def adjust_support_count(self, id: int, delta: int) -> None:
        """Add ``delta`` to support_count."""
        stmt = (
            update(VolunteerPostModel)
            .where(VolunteerPostModel.id == id)
            .values(support_count=VolunteerPostModel.support_count + delta)
        )
        await self._session.execute(stmt)

    def _row_to_entity(self, row: Any) -> VolunteerPost:
        """Convert a post+author row to a domain entity."""
        model: VolunteerPostModel = row.VolunteerPostModel
        return VolunteerPost(
            id=model.id,
            title=model.title,
            description=model.description,
            date_time=model.date_time,
            reward=model.reward,
            user_id=model.user_id,
            support_count=model.support_count,
            created_at=model.created_at,
            updated_at=model.updated_at,
            author=author_from_row(model.user_id, row),
        )
