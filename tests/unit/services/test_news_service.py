"""Unit tests for News service layer."""

import pytest

from core.exceptions import (
    AuthorizationError,
    InvalidPriorityError,
    NewsNotFoundError,
    ValidationError,
)
from domain.entities.news import News, NewsPriority
from domain.entities.user import Actor
from domain.services.news_service import NewsService, parse_priority

from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> NewsService:
    return NewsService(lambda: uow)


class TestParsePriority:
    def test_default_is_notice(self) -> None:
        assert parse_priority(None) is NewsPriority.NOTICE

    @pytest.mark.parametrize("value", ["important", "caution", "notice"])
    def test_accepts_known_values(self, value: str) -> None:
        assert parse_priority(value).value == value

    def test_rejects_unknown(self) -> None:
        with pytest.raises(InvalidPriorityError) as exc_info:
            parse_priority("urgent")

        assert exc_info.value.status_code == 400


class TestNewsService:
    @pytest.mark.asyncio
    async def test_create_defaults_priority(
        self, service: NewsService, uow: FakeUnitOfWork, actor: Actor
    ) -> None:
        uow.news.create.side_effect = lambda n: n

        news = await service.create(actor, title="Water outage", content="Tuesday 9-12")

        assert news.priority is NewsPriority.NOTICE
        assert news.author_id == actor.id
        assert uow.committed

    @pytest.mark.asyncio
    async def test_create_invalid_priority_writes_nothing(
        self, service: NewsService, uow: FakeUnitOfWork, actor: Actor
    ) -> None:
        with pytest.raises(InvalidPriorityError):
            await service.create(actor, title="t", content="c", priority="urgent")

        uow.news.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_increment_view_missing(self, service: NewsService, uow: FakeUnitOfWork) -> None:
        uow.news.increment_views.return_value = False

        with pytest.raises(NewsNotFoundError):
            await service.increment_view(404)

        assert not uow.committed

    @pytest.mark.asyncio
    async def test_non_author_cannot_update(
        self, service: NewsService, uow: FakeUnitOfWork, stranger: Actor
    ) -> None:
        uow.news.get.return_value = News(id=3, title="t", content="c", author_id=1)

        with pytest.raises(AuthorizationError):
            await service.update(3, stranger, {"title": "mine"})

        uow.news.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_null_published_flag(
        self, service: NewsService, uow: FakeUnitOfWork, actor: Actor
    ) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await service.update(3, actor, {"is_published": None})

        assert exc_info.value.details == {"field": "is_published"}
        uow.news.get.assert_not_called()
