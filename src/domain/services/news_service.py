"""News service layer with business logic."""

from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from typing import Any

import structlog

from core.exceptions import (
    AuthorizationError,
    InvalidPriorityError,
    NewsNotFoundError,
    ValidationError,
)
from domain.entities.news import News, NewsPriority
from domain.entities.pagination import Page, PageRequest
from domain.entities.user import Actor
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

UPDATABLE_FIELDS = frozenset(
    {
        "title",
        "content",
        "priority",
        "image_url",
        "image_name",
        "date_time",
        "disclaimer",
        "is_published",
    }
)


def parse_priority(value: str | NewsPriority | None) -> NewsPriority:
    """Validate a priority string. ``None`` means the default, notice."""
    if value is None:
        return NewsPriority.NOTICE
    try:
        return NewsPriority(value)
    except ValueError:
        raise InvalidPriorityError(str(value), [p.value for p in NewsPriority]) from None


class NewsService:
    """Service layer for News business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def list_published(self, page: PageRequest) -> Page[News]:
        """Get one page of published news, newest first."""
        async with self._uow_factory() as uow:
            items, total = await uow.news.list_published(page)
            return Page(items=items, total=total, page=page.page, limit=page.limit)

    async def get_by_id(self, news_id: int) -> News:
        """Get a news item by ID."""
        async with self._uow_factory() as uow:
            news = await uow.news.get(news_id)
            if not news:
                raise NewsNotFoundError(news_id)
            return news

    async def create(self, actor: Actor, **fields: Any) -> News:
        """Create a news item authored by ``actor``."""
        self._check_fields(fields)
        for name in ("title", "content"):
            if not (fields.get(name) or "").strip():
                raise ValidationError(f"{name} is required", field=name)
        fields["priority"] = parse_priority(fields.get("priority"))

        async with self._uow_factory() as uow:
            news = await uow.news.create(News(author_id=actor.id, **fields))
            await uow.commit()

        logger.info("news_created", news_id=news.id, author_id=actor.id)
        return news

    async def update(self, news_id: int, actor: Actor, changes: dict[str, Any]) -> News:
        """Update a news item. Only the author or an admin may do this."""
        self._check_fields(changes)
        for name in ("title", "content"):
            if name in changes and not (changes[name] or "").strip():
                raise ValidationError(f"{name} is required", field=name)
        if "priority" in changes:
            changes["priority"] = parse_priority(changes["priority"])

        async with self._uow_factory() as uow:
            news = await uow.news.get(news_id)
            if not news:
                raise NewsNotFoundError(news_id)
            if not actor.can_modify(news.author_id):
                raise AuthorizationError("Only the author can modify this news")

            updated = await uow.news.update(replace(news, **changes, updated_at=datetime.utcnow()))
            await uow.commit()
            return updated

    async def delete(self, news_id: int, actor: Actor) -> None:
        """Delete a news item. Only the author or an admin may do this."""
        async with self._uow_factory() as uow:
            news = await uow.news.get(news_id)
            if not news:
                raise NewsNotFoundError(news_id)
            if not actor.can_modify(news.author_id):
                raise AuthorizationError("Only the author can delete this news")

            await uow.news.delete(news_id)
            await uow.commit()

        logger.info("news_deleted", news_id=news_id, actor_id=actor.id)

    async def increment_view(self, news_id: int) -> News:
        """Count one view and return the updated item."""
        async with self._uow_factory() as uow:
            if not await uow.news.increment_views(news_id):
                raise NewsNotFoundError(news_id)
            await uow.commit()
            news = await uow.news.get(news_id)
            if not news:
                raise NewsNotFoundError(news_id)
            return news

    def _check_fields(self, fields: dict[str, Any]) -> None:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown news fields: {', '.join(sorted(unknown))}")
        if "is_published" in fields and fields["is_published"] is None:
            raise ValidationError("is_published cannot be null", field="is_published")
