"""Unit tests for Activity service layer."""

import pytest

from core.exceptions import (
    ActivityFullError,
    ActivityInactiveError,
    ActivityNotFoundError,
    AlreadyJoinedError,
    AuthorizationError,
    DuplicateEntryError,
    NotJoinedError,
    ValidationError,
)
from domain.entities.activity import Activity
from domain.entities.pagination import PageRequest
from domain.entities.user import Actor
from domain.services.activity_service import ActivityService

# FakeUnitOfWork is provided by the shared conftest at tests/unit/conftest.py.
# Import it here only for type-hint usage in fixtures/tests.
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> ActivityService:
    return ActivityService(lambda: uow)


@pytest.fixture
def sample_activity(actor: Actor) -> Activity:
    return Activity(
        id=10,
        title="Morning walk",
        description="Around the lake",
        date="2026-11-02",
        time="07:00",
        place="Lake park",
        capacity=2,
        author_id=actor.id,
    )


def _fields(**overrides: object) -> dict[str, object]:
    fields: dict[str, object] = {
        "title": "Morning walk",
        "description": "Around the lake",
        "date": "2026-11-02",
        "time": "07:00",
        "place": "Lake park",
        "capacity": 20,
    }
    fields.update(overrides)
    return fields


class TestActivityServiceList:
    @pytest.mark.asyncio
    async def test_wraps_repository_page(
        self, service: ActivityService, uow: FakeUnitOfWork, sample_activity: Activity
    ) -> None:
        """list_active returns a Page with the repository's total."""
        uow.activities.list_active.return_value = ([sample_activity], 15)

        page = await service.list_active(PageRequest(page=2, limit=10))

        assert page.items == [sample_activity]
        assert page.total == 15
        assert page.total_pages == 2


class TestActivityServiceCreate:
    @pytest.mark.asyncio
    async def test_creates_with_actor_as_author(
        self, service: ActivityService, uow: FakeUnitOfWork, actor: Actor
    ) -> None:
        uow.activities.create.side_effect = lambda a: a

        activity = await service.create(actor, **_fields())

        assert activity.author_id == actor.id
        assert activity.joined == 0
        assert uow.committed

    @pytest.mark.asyncio
    async def test_missing_required_field(
        self, service: ActivityService, uow: FakeUnitOfWork, actor: Actor
    ) -> None:
        fields = _fields()
        del fields["place"]

        with pytest.raises(ValidationError):
            await service.create(actor, **fields)

        uow.activities.create.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("capacity", [0, -3])
    async def test_rejects_non_positive_capacity(
        self, service: ActivityService, actor: Actor, capacity: int
    ) -> None:
        with pytest.raises(ValidationError):
            await service.create(actor, **_fields(capacity=capacity))


class TestActivityServiceUpdateDelete:
    @pytest.mark.asyncio
    async def test_author_can_update(
        self,
        service: ActivityService,
        uow: FakeUnitOfWork,
        actor: Actor,
        sample_activity: Activity,
    ) -> None:
        uow.activities.get.return_value = sample_activity
        uow.activities.update.side_effect = lambda a: a

        updated = await service.update(sample_activity.id, actor, {"title": "Evening walk"})

        assert updated.title == "Evening walk"
        assert updated.place == "Lake park"
        assert uow.committed

    @pytest.mark.asyncio
    async def test_non_author_cannot_delete(
        self,
        service: ActivityService,
        uow: FakeUnitOfWork,
        stranger: Actor,
        sample_activity: Activity,
    ) -> None:
        uow.activities.get.return_value = sample_activity

        with pytest.raises(AuthorizationError):
            await service.delete(sample_activity.id, stranger)

        uow.activities.delete.assert_not_called()
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_admin_can_delete(
        self,
        service: ActivityService,
        uow: FakeUnitOfWork,
        admin: Actor,
        sample_activity: Activity,
    ) -> None:
        uow.activities.get.return_value = sample_activity

        await service.delete(sample_activity.id, admin)

        uow.activities.delete.assert_called_once_with(sample_activity.id)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_update_missing(
        self, service: ActivityService, uow: FakeUnitOfWork, actor: Actor
    ) -> None:
        uow.activities.get.return_value = None

        with pytest.raises(ActivityNotFoundError):
            await service.update(404, actor, {"title": "x"})

    @pytest.mark.asyncio
    async def test_null_active_flag(
        self, service: ActivityService, uow: FakeUnitOfWork, actor: Actor
    ) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await service.update(3, actor, {"is_active": None})

        assert exc_info.value.details == {"field": "is_active"}
        uow.activities.update.assert_not_called()


class TestActivityServiceJoin:
    @pytest.mark.asyncio
    async def test_join_increments_and_records(
        self,
        service: ActivityService,
        uow: FakeUnitOfWork,
        stranger: Actor,
        sample_activity: Activity,
    ) -> None:
        uow.activities.get.return_value = sample_activity
        uow.activities.has_joined.return_value = False
        uow.activities.try_increment_joined.return_value = True

        await service.join(sample_activity.id, stranger)

        uow.activities.add_join.assert_called_once_with(sample_activity.id, stranger.id)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_join_inactive(
        self,
        service: ActivityService,
        uow: FakeUnitOfWork,
        stranger: Actor,
        sample_activity: Activity,
    ) -> None:
        sample_activity.is_active = False
        uow.activities.get.return_value = sample_activity

        with pytest.raises(ActivityInactiveError):
            await service.join(sample_activity.id, stranger)

    @pytest.mark.asyncio
    async def test_join_twice(
        self,
        service: ActivityService,
        uow: FakeUnitOfWork,
        stranger: Actor,
        sample_activity: Activity,
    ) -> None:
        uow.activities.get.return_value = sample_activity
        uow.activities.has_joined.return_value = True

        with pytest.raises(AlreadyJoinedError):
            await service.join(sample_activity.id, stranger)

        uow.activities.try_increment_joined.assert_not_called()

    @pytest.mark.asyncio
    async def test_join_full(
        self,
        service: ActivityService,
        uow: FakeUnitOfWork,
        stranger: Actor,
        sample_activity: Activity,
    ) -> None:
        uow.activities.get.return_value = sample_activity
        uow.activities.has_joined.return_value = False
        uow.activities.try_increment_joined.return_value = False

        with pytest.raises(ActivityFullError):
            await service.join(sample_activity.id, stranger)

        uow.activities.add_join.assert_not_called()
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_join_rolls_back(
        self,
        service: ActivityService,
        uow: FakeUnitOfWork,
        stranger: Actor,
        sample_activity: Activity,
    ) -> None:
        uow.activities.get.return_value = sample_activity
        uow.activities.has_joined.return_value = False
        uow.activities.try_increment_joined.return_value = True
        uow.activities.add_join.side_effect = DuplicateEntryError("activity join")

        with pytest.raises(AlreadyJoinedError):
            await service.join(sample_activity.id, stranger)

        assert uow.rolled_back
        assert not uow.committed


class TestActivityServiceLeave:
    @pytest.mark.asyncio
    async def test_leave_decrements(
        self,
        service: ActivityService,
        uow: FakeUnitOfWork,
        stranger: Actor,
        sample_activity: Activity,
    ) -> None:
        uow.activities.get.return_value = sample_activity
        uow.activities.remove_join.return_value = 1

        await service.leave(sample_activity.id, stranger)

        uow.activities.adjust_joined.assert_called_once_with(sample_activity.id, -1)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_leave_without_joining(
        self,
        service: ActivityService,
        uow: FakeUnitOfWork,
        stranger: Actor,
        sample_activity: Activity,
    ) -> None:
        uow.activities.get.return_value = sample_activity
        uow.activities.remove_join.return_value = 0

        with pytest.raises(NotJoinedError):
            await service.leave(sample_activity.id, stranger)

        uow.activities.adjust_joined.assert_not_called()
