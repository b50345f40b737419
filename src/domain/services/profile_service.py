"""Profile service layer with business logic."""

from collections.abc import Callable
from datetime import date

import structlog

from core.exceptions import (
    AuthorizationError,
    ProfileNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from domain.entities.profile import (
    ProfileUpdate,
    UserProfile,
    age_on,
    birth_date_for_age,
)
from domain.entities.user import Actor
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

MAX_AGE = 150


def parse_age(value: int | str | None) -> int | None:
    """Validate an age given as int or numeric string."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError("Age must be a whole number", field="age")
    try:
        age = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Age must be a whole number", field="age") from None
    if not 0 <= age <= MAX_AGE:
        raise ValidationError(f"Age must be between 0 and {MAX_AGE}", field="age")
    return age


def normalize_interests(names: list[str]) -> list[str]:
    """Trim names, drop blanks and collapse duplicates, keeping first-seen order."""
    seen: dict[str, None] = {}
    for name in names:
        cleaned = (name or "").strip()
        if cleaned:
            seen.setdefault(cleaned, None)
    return list(seen)


class ProfileService:
    """Service layer for user profiles."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        today: Callable[[], date] = date.today,
    ) -> None:
        self._uow_factory = uow_factory
        self._today = today

    async def get(self, user_id: int) -> UserProfile:
        """Get a user with profile and child collections."""
        async with self._uow_factory() as uow:
            return await self._load(uow, user_id)

    async def update(self, user_id: int, actor: Actor, update: ProfileUpdate) -> UserProfile:
        """Replace a user's profile and supplied child collections atomically.

        Scalars in ``update.fields`` overwrite the stored values; each supplied
        collection replaces the stored rows wholesale. Any failure rolls back
        every write.
        """
        if not actor.can_modify(user_id):
            raise AuthorizationError("Cannot modify another user's profile")

        full_name = (update.full_name or "").strip()
        if not full_name:
            raise ValidationError("Full name is required", field="full_name")
        age = parse_age(update.age)
        interests = (
            normalize_interests(update.interests) if update.interests is not None else None
        )

        async with self._uow_factory() as uow:
            if not await uow.users.get(user_id):
                raise UserNotFoundError(user_id)

            fields = dict(update.fields)
            if age is not None:
                fields["date_of_birth"] = await self._birth_date(uow, user_id, age)

            await uow.profiles.upsert(user_id, full_name, fields)

            if update.health_conditions is not None:
                conditions = [c.strip() for c in update.health_conditions if c and c.strip()]
                await uow.profiles.replace_health_conditions(user_id, conditions)

            if interests is not None:
                await uow.profiles.clear_interests(user_id)
                for name in interests:
                    interest_id = await uow.interests.get_or_create_id(name)
                    await uow.profiles.add_interest(user_id, interest_id)

            if update.emergency_contacts is not None:
                await uow.profiles.replace_emergency_contacts(user_id, update.emergency_contacts)

            await uow.commit()
            logger.info("profile_updated", user_id=user_id, actor_id=actor.id)
            return await self._load(uow, user_id)

    async def delete(self, user_id: int, actor: Actor) -> None:
        """Delete a user's profile with all child collections."""
        if not actor.can_modify(user_id):
            raise AuthorizationError("Cannot delete another user's profile")

        async with self._uow_factory() as uow:
            if not await uow.profiles.delete(user_id):
                raise ProfileNotFoundError(user_id)
            await uow.commit()

        logger.info("profile_deleted", user_id=user_id, actor_id=actor.id)

    def age_of(self, profile: UserProfile) -> int | None:
        """Current age derived from the stored birth date."""
        if profile.profile is None or profile.profile.date_of_birth is None:
            return None
        return age_on(profile.profile.date_of_birth, self._today())

    async def _birth_date(self, uow: IUnitOfWork, user_id: int, age: int) -> date:
        # Keep the stored birth date when it already yields this age, so
        # re-saving an unchanged form does not shift the date every day.
        today = self._today()
        current = await uow.profiles.get(user_id)
        if current and current.date_of_birth and age_on(current.date_of_birth, today) == age:
            return current.date_of_birth
        return birth_date_for_age(age, today)

    async def _load(self, uow: IUnitOfWork, user_id: int) -> UserProfile:
        user = await uow.users.get(user_id)
        if not user:
            raise UserNotFoundError(user_id)
        return UserProfile(
            user=user,
            profile=await uow.profiles.get(user_id),
            health_conditions=await uow.profiles.get_health_conditions(user_id),
            interests=await uow.profiles.get_interest_names(user_id),
            emergency_contacts=await uow.profiles.get_emergency_contacts(user_id),
        )
