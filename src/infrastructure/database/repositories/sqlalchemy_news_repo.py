"""SQLAlchemy implementation of News repository."""

from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.news import News, NewsPriority
from domain.entities.pagination import PageRequest
from infrastructure.database.models import NewsModel
from infrastructure.database.repositories.sqlalchemy_user_repo import (
    author_from_row,
    select_with_author,
)


class SQLAlchemyNewsRepository:
    """SQLAlchemy implementation of INewsRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_published(self, page: PageRequest) -> tuple[list[News], int]:
        """Get one page of published news (newest first) and the total."""
        count_stmt = (
            select(func.count()).select_from(NewsModel).where(NewsModel.is_published.is_(True))
        )
        total = (await self._session.execute(count_stmt)).scalar_one()

        stmt = (
            select_with_author(NewsModel, NewsModel.author_id)
            .where(NewsModel.is_published.is_(True))
            .order_by(NewsModel.created_at.desc(), NewsModel.id.desc())
            .offset(page.offset)
            .limit(page.limit)
        )
        result = await self._session.execute(stmt)
        return [self._row_to_entity(row) for row in result], total

    async def get(self, id: int) -> News | None:
        """Get a news item by ID."""
        stmt = select_with_author(NewsModel, NewsModel.author_id).where(NewsModel.id == id)
        row = (await self._session.execute(stmt)).first()
        return self._row_to_entity(row) if row else None

    async def create(self, news: News) -> News:
        """Create a news item."""
        model = NewsModel(
            title=news.title,
            content=news.content,
            priority=news.priority.value,
            image_url=news.image_url,
            image_name=news.image_name,
            date_time=news.date_time,
            disclaimer=news.disclaimer,
            is_published=news.is_published,
            view_count=news.view_count,
            author_id=news.author_id,
            created_at=news.created_at,
            updated_at=news.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        created = await self.get(model.id)
        if not created:
            raise ValueError(f"News {model.id} not found after flush")
        return created

    async def update(self, news: News) -> News:
        """Update a news item."""
        model = await self._session.get(NewsModel, news.id)
        if not model:
            raise ValueError(f"News {news.id} not found")

        model.title = news.title
        model.content = news.content
        model.priority = news.priority.value
        model.image_url = news.image_url
        model.image_name = news.image_name
        model.date_time = news.date_time
        model.disclaimer = news.disclaimer
        model.is_published = news.is_published
        model.updated_at = news.updated_at

        await self._session.flush()
        updated = await self.get(model.id)
        if not updated:
            raise ValueError(f"News {model.id} not found after flush")
        return updated

    async def delete(self, id: int) -> bool:
        """Delete a news item."""
        result = await self._session.execute(delete(NewsModel).where(NewsModel.id == id))
        return bool(result.rowcount)

    async def increment_views(self, id: int) -> bool:
        """Add one view. Returns False if the item does not exist."""
        stmt = (
            update(NewsModel)
            .where(NewsModel.id == id)
            .values(view_count=NewsModel.view_count + 1)
        )
        result = await self._session.execute(stmt)
        return bool(result.rowcount)

    def _row_to_entity(self, row: Any) -> News:
        """Convert a news+author row to a domain entity."""
        model: NewsModel = row.NewsModel
        return News(
            id=model.id,
            title=model.title,
            content=model.content,
            priority=NewsPriority(model.priority),
            image_url=model.image_url,
            image_name=model.image_name,
            date_time=model.date_time,
            disclaimer=model.disclaimer,
            is_published=model.is_published,
            view_count=model.view_count,
            author_id=model.author_id,
            created_at=model.created_at,
            updated_at=model.updated_at,
            author=author_from_row(model.author_id, row),
        )
