"""Activity service layer with business logic."""

from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from typing import Any

import structlog

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
from domain.entities.activity import Activity, Participant
from domain.entities.pagination import Page, PageRequest
from domain.entities.user import Actor
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

REQUIRED_FIELDS = ("title", "description", "date", "time", "place", "capacity")

UPDATABLE_FIELDS = frozenset(
    {
        "title",
        "description",
        "date",
        "time",
        "end_time",
        "place",
        "location",
        "latitude",
        "longitude",
        "capacity",
        "image_url",
        "image_name",
        "category",
        "is_active",
    }
)


class ActivityService:
    """Service layer for Activity business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def list_active(self, page: PageRequest) -> Page[Activity]:
        """Get one page of active activities, newest first."""
        async with self._uow_factory() as uow:
            items, total = await uow.activities.list_active(page)
            return Page(items=items, total=total, page=page.page, limit=page.limit)

    async def get_by_id(self, activity_id: int) -> Activity:
        """Get an activity by ID."""
        async with self._uow_factory() as uow:
            activity = await uow.activities.get(activity_id)
            if not activity:
                raise ActivityNotFoundError(activity_id)
            return activity

    async def create(self, actor: Actor, **fields: Any) -> Activity:
        """Create an activity authored by ``actor``."""
        for name in REQUIRED_FIELDS:
            if fields.get(name) is None:
                raise ValidationError(f"{name} is required", field=name)
        self._check_fields(fields)
        capacity = fields.get("capacity")
        if capacity is None or capacity <= 0:
            raise ValidationError("Capacity must be a positive number", field="capacity")

        async with self._uow_factory() as uow:
            activity = await uow.activities.create(Activity(author_id=actor.id, **fields))
            await uow.commit()

        logger.info("activity_created", activity_id=activity.id, author_id=actor.id)
        return activity

    async def update(self, activity_id: int, actor: Actor, changes: dict[str, Any]) -> Activity:
        """Update an activity. Only the author or an admin may do this."""
        self._check_fields(changes)
        if "capacity" in changes and (changes["capacity"] is None or changes["capacity"] <= 0):
            raise ValidationError("Capacity must be a positive number", field="capacity")

        async with self._uow_factory() as uow:
            activity = await uow.activities.get(activity_id)
            if not activity:
                raise ActivityNotFoundError(activity_id)
            if not actor.can_modify(activity.author_id):
                raise AuthorizationError("Only the author can modify this activity")

            updated = await uow.activities.update(
                replace(activity, **changes, updated_at=datetime.utcnow())
            )
            await uow.commit()
            return updated

    async def delete(self, activity_id: int, actor: Actor) -> None:
        """Delete an activity. Only the author or an admin may do this."""
        async with self._uow_factory() as uow:
            activity = await uow.activities.get(activity_id)
            if not activity:
                raise ActivityNotFoundError(activity_id)
            if not actor.can_modify(activity.author_id):
                raise AuthorizationError("Only the author can delete this activity")

            await uow.activities.delete(activity_id)
            await uow.commit()

        logger.info("activity_deleted", activity_id=activity_id, actor_id=actor.id)

    async def increment_view(self, activity_id: int) -> Activity:
        """Count one view and return the updated activity."""
        async with self._uow_factory() as uow:
            if not await uow.activities.increment_views(activity_id):
                raise ActivityNotFoundError(activity_id)
            await uow.commit()
            activity = await uow.activities.get(activity_id)
            if not activity:
                raise ActivityNotFoundError(activity_id)
            return activity

    async def join(self, activity_id: int, actor: Actor) -> Activity:
        """Join an activity.

        The join row and the ``joined`` counter change in one transaction, and
        the counter only moves while it is below capacity, so concurrent joins
        cannot overfill an activity.
        """
        async with self._uow_factory() as uow:
            activity = await uow.activities.get(activity_id)
            if not activity:
                raise ActivityNotFoundError(activity_id)
            if not activity.is_active:
                raise ActivityInactiveError(activity_id)
            if await uow.activities.has_joined(activity_id, actor.id):
                raise AlreadyJoinedError(activity_id)
            if not await uow.activities.try_increment_joined(activity_id):
                raise ActivityFullError(activity_id)

            try:
                await uow.activities.add_join(activity_id, actor.id)
            except DuplicateEntryError:
                await uow.rollback()
                raise AlreadyJoinedError(activity_id) from None

            await uow.commit()
            joined = await uow.activities.get(activity_id)

        logger.info("activity_joined", activity_id=activity_id, user_id=actor.id)
        if not joined:
            raise ActivityNotFoundError(activity_id)
        return joined

    async def leave(self, activity_id: int, actor: Actor) -> Activity:
        """Leave an activity previously joined."""
        async with self._uow_factory() as uow:
            activity = await uow.activities.get(activity_id)
            if not activity:
                raise ActivityNotFoundError(activity_id)

            removed = await uow.activities.remove_join(activity_id, actor.id)
            if not removed:
                raise NotJoinedError(activity_id)
            await uow.activities.adjust_joined(activity_id, -removed)

            await uow.commit()
            left = await uow.activities.get(activity_id)

        logger.info("activity_left", activity_id=activity_id, user_id=actor.id)
        if not left:
            raise ActivityNotFoundError(activity_id)
        return left

    async def get_participants(self, activity_id: int) -> list[Participant]:
        """Get the users who joined an activity, in join order."""
        async with self._uow_factory() as uow:
            if not await uow.activities.get(activity_id):
                raise ActivityNotFoundError(activity_id)
            return await uow.activities.list_participants(activity_id)

    def _check_fields(self, fields: dict[str, Any]) -> None:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown activity fields: {', '.join(sorted(unknown))}")
        for name in ("title", "description", "date", "time", "place"):
            if name in fields and not (fields[name] or "").strip():
                raise ValidationError(f"{name} is required", field=name)
        if "is_active" in fields and fields["is_active"] is None:
            raise ValidationError("is_active cannot be null", field="is_active")
