"""Unit tests for Profile service layer."""

from datetime import date

import pytest

from core.exceptions import (
    AuthorizationError,
    ProfileNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from domain.entities.profile import (
    Profile,
    ProfileUpdate,
    age_on,
    birth_date_for_age,
)
from domain.entities.user import Actor, User
from domain.services.profile_service import ProfileService, normalize_interests, parse_age

from tests.unit.conftest import FakeUnitOfWork

TODAY = date(2026, 10, 19)


@pytest.fixture
def service(uow: FakeUnitOfWork) -> ProfileService:
    return ProfileService(lambda: uow, today=lambda: TODAY)


@pytest.fixture
def existing_user(uow: FakeUnitOfWork, actor: Actor) -> User:
    user = User(id=actor.id, email=actor.email)
    uow.users.get.return_value = user
    uow.profiles.get.return_value = None
    uow.profiles.get_health_conditions.return_value = []
    uow.profiles.get_interest_names.return_value = []
    uow.profiles.get_emergency_contacts.return_value = []
    return user


class TestParseAge:
    @pytest.mark.parametrize("value,expected", [(0, 0), (42, 42), ("42", 42), (150, 150)])
    def test_valid(self, value: int | str, expected: int) -> None:
        assert parse_age(value) == expected

    @pytest.mark.parametrize("value", [None, ""])
    def test_absent(self, value: str | None) -> None:
        assert parse_age(value) is None

    @pytest.mark.parametrize("value", [-1, 151, "abc", "4.5", True])
    def test_invalid(self, value: object) -> None:
        with pytest.raises(ValidationError):
            parse_age(value)  # type: ignore[arg-type]


class TestAgeHelpers:
    def test_age_before_birthday(self) -> None:
        assert age_on(date(1980, 12, 1), TODAY) == 45

    def test_age_on_birthday(self) -> None:
        assert age_on(date(1980, 10, 19), TODAY) == 46

    def test_leap_day_falls_back(self) -> None:
        assert birth_date_for_age(1, date(2028, 2, 29)) == date(2027, 2, 28)


def test_normalize_interests_dedupes_in_order() -> None:
    assert normalize_interests([" Hiking", "Cooking", "Hiking ", "", "  "]) == [
        "Hiking",
        "Cooking",
    ]


class TestProfileUpdate:
    @pytest.mark.asyncio
    async def test_forbidden_before_any_write(
        self, service: ProfileService, uow: FakeUnitOfWork, stranger: Actor
    ) -> None:
        with pytest.raises(AuthorizationError):
            await service.update(1, stranger, ProfileUpdate(full_name="Mallory"))

        uow.profiles.upsert.assert_not_called()

    @pytest.mark.asyncio
    async def test_blank_full_name(
        self, service: ProfileService, uow: FakeUnitOfWork, actor: Actor
    ) -> None:
        with pytest.raises(ValidationError):
            await service.update(actor.id, actor, ProfileUpdate(full_name="   "))

        uow.profiles.upsert.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_user(
        self, service: ProfileService, uow: FakeUnitOfWork, admin: Actor
    ) -> None:
        uow.users.get.return_value = None

        with pytest.raises(UserNotFoundError):
            await service.update(404, admin, ProfileUpdate(full_name="Nobody"))

    @pytest.mark.asyncio
    async def test_age_becomes_birth_date(
        self,
        service: ProfileService,
        uow: FakeUnitOfWork,
        actor: Actor,
        existing_user: User,
    ) -> None:
        await service.update(actor.id, actor, ProfileUpdate(full_name="Alice", age="30"))

        uow.profiles.upsert.assert_called_once_with(
            actor.id, "Alice", {"date_of_birth": date(1996, 10, 19)}
        )
        assert uow.committed

    @pytest.mark.asyncio
    async def test_matching_age_keeps_stored_birth_date(
        self,
        service: ProfileService,
        uow: FakeUnitOfWork,
        actor: Actor,
        existing_user: User,
    ) -> None:
        stored = date(1996, 3, 2)
        uow.profiles.get.return_value = Profile(
            user_id=actor.id, full_name="Alice", date_of_birth=stored
        )

        await service.update(actor.id, actor, ProfileUpdate(full_name="Alice", age=30))

        _, _, fields = uow.profiles.upsert.call_args.args
        assert fields["date_of_birth"] == stored

    @pytest.mark.asyncio
    async def test_interests_relinked_by_name(
        self,
        service: ProfileService,
        uow: FakeUnitOfWork,
        actor: Actor,
        existing_user: User,
    ) -> None:
        uow.interests.get_or_create_id.side_effect = len

        await service.update(
            actor.id,
            actor,
            ProfileUpdate(full_name="Alice", interests=["Hiking", "Hiking", "Chess"]),
        )

        uow.profiles.clear_interests.assert_called_once_with(actor.id)
        assert [c.args[0] for c in uow.interests.get_or_create_id.call_args_list] == [
            "Hiking",
            "Chess",
        ]
        assert uow.profiles.add_interest.call_count == 2

    @pytest.mark.asyncio
    async def test_omitted_collections_untouched(
        self,
        service: ProfileService,
        uow: FakeUnitOfWork,
        actor: Actor,
        existing_user: User,
    ) -> None:
        await service.update(actor.id, actor, ProfileUpdate(full_name="Alice"))

        uow.profiles.replace_health_conditions.assert_not_called()
        uow.profiles.clear_interests.assert_not_called()
        uow.profiles.replace_emergency_contacts.assert_not_called()


class TestProfileDelete:
    @pytest.mark.asyncio
    async def test_missing_profile(
        self, service: ProfileService, uow: FakeUnitOfWork, actor: Actor
    ) -> None:
        uow.profiles.delete.return_value = False

        with pytest.raises(ProfileNotFoundError):
            await service.delete(actor.id, actor)

        assert not uow.committed

    @pytest.mark.asyncio
    async def test_admin_deletes_any_profile(
        self, service: ProfileService, uow: FakeUnitOfWork, admin: Actor
    ) -> None:
        uow.profiles.delete.return_value = True

        await service.delete(1, admin)

        uow.profiles.delete.assert_called_once_with(1)
        assert uow.committed
