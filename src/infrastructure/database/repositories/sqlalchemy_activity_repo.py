"""SQLAlchemy implementation of Activity repository."""

from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import DuplicateEntryError
from domain.entities.activity import Activity, Participant
from domain.entities.pagination import PageRequest
from infrastructure.database.errors import is_unique_violation
from infrastructure.database.models import ActivityJoinModel, ActivityModel
from infrastructure.database.repositories.sqlalchemy_user_repo import (
    author_from_row,
    select_with_author,
)

_EDITABLE = (
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
)


class SQLAlchemyActivityRepository:
    """SQLAlchemy implementation of IActivityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_active(self, page: PageRequest) -> tuple[list[Activity], int]:
        """Get one page of active activities (newest first) and the total."""
        count_stmt = (
            select(func.count()).select_from(ActivityModel).where(ActivityModel.is_active.is_(True))
        )
        total = (await self._session.execute(count_stmt)).scalar_one()

        stmt = (
            select_with_author(ActivityModel, ActivityModel.author_id)
            .where(ActivityModel.is_active.is_(True))
            .order_by(ActivityModel.created_at.desc(), ActivityModel.id.desc())
            .offset(page.offset)
            .limit(page.limit)
        )
        result = await self._session.execute(stmt)
        return [self._row_to_entity(row) for row in result], total

    async def get(self, id: int) -> Activity | None:
        """Get an activity by ID."""
        stmt = select_with_author(ActivityModel, ActivityModel.author_id).where(
            ActivityModel.id == id
        )
        row = (await self._session.execute(stmt)).first()
        return self._row_to_entity(row) if row else None

    async def create(self, activity: Activity) -> Activity:
        """Create a new activity."""
        model = ActivityModel(
            author_id=activity.author_id,
            joined=activity.joined,
            comments=activity.comments,
            views=activity.views,
            created_at=activity.created_at,
            updated_at=activity.updated_at,
            **{name: getattr(activity, name) for name in _EDITABLE},
        )
        self._session.add(model)
        await self._session.flush()
        created = await self.get(model.id)
        if not created:
            raise ValueError(f"Activity {model.id} not found after flush")
        return created

    async def update(self, activity: Activity) -> Activity:
        """Update an existing activity."""
        model = await self._session.get(ActivityModel, activity.id)
        if not model:
            raise ValueError(f"Activity {activity.id} not found")

        for name in _EDITABLE:
            setattr(model, name, getattr(activity, name))
        model.updated_at = activity.updated_at

        await self._session.flush()
        updated = await self.get(model.id)
        if not updated:
            raise ValueError(f"Activity {model.id} not found after flush")
        return updated

    async def delete(self, id: int) -> bool:
        """Delete an activity with its joins."""
        await self._session.execute(
            delete(ActivityJoinModel).where(ActivityJoinModel.activity_id == id)
        )
        result = await self._session.execute(delete(ActivityModel).where(ActivityModel.id == id))
        return bool(result.rowcount)

    async def increment_views(self, id: int) -> bool:
        """Add one view. Returns False if the activity does not exist."""
        stmt = (
            update(ActivityModel)
            .where(ActivityModel.id == id)
            .values(views=ActivityModel.views + 1)
        )
        result = await self._session.execute(stmt)
        return bool(result.rowcount)

    async def has_joined(self, activity_id: int, user_id: int) -> bool:
        """Check whether a join row exists."""
        stmt = select(ActivityJoinModel.id).where(
            ActivityJoinModel.activity_id == activity_id,
            ActivityJoinModel.user_id == user_id,
        )
        return (await self._session.execute(stmt)).first() is not None

    async def try_increment_joined(self, activity_id: int) -> bool:
        """Add one to ``joined`` only while it is below capacity."""
        stmt = (
            update(ActivityModel)
            .where(
                ActivityModel.id == activity_id,
                ActivityModel.joined < ActivityModel.capacity,
            )
            .values(joined=ActivityModel.joined + 1)
        )
        result = await self._session.execute(stmt)
        return bool(result.rowcount)

    async def add_join(self, activity_id: int, user_id: int) -> None:
        """Insert a join row. Raises DuplicateEntryError if it exists."""
        self._session.add(ActivityJoinModel(activity_id=activity_id, user_id=user_id))
        try:
            await self._session.flush()
        except IntegrityError as e:
            if is_unique_violation(e):
                raise DuplicateEntryError("activity join") from e
            raise

    async def remove_join(self, activity_id: int, user_id: int) -> int:
        """Delete a join row and return the number of rows removed."""
        stmt = delete(ActivityJoinModel).where(
            ActivityJoinModel.activity_id == activity_id,
            ActivityJoinModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        return result.rowcount

    async def adjust_joined(self, activity_id: int, delta: int) -> None:
        """Add ``delta`` to the joined counter."""
        stmt = (
            update(ActivityModel)
            .where(ActivityModel.id == activity_id)
            .values(joined=ActivityModel.joined + delta)
        )
        await self._session.execute(stmt)

    async def list_participants(self, activity_id: int) -> list[Participant]:
        """Get joined users in join order."""
        stmt = (
            select_with_author(ActivityJoinModel, ActivityJoinModel.user_id)
            .where(ActivityJoinModel.activity_id == activity_id)
            .order_by(ActivityJoinModel.joined_at, ActivityJoinModel.id)
        )
        result = await self._session.execute(stmt)
        return [
            Participant(
                user=author_from_row(row.ActivityJoinModel.user_id, row),
                joined_at=row.ActivityJoinModel.joined_at,
            )
            for row in result
        ]

    def _row_to_entity(self, row: Any) -> Activity:
        """Convert an activity+author row to a domain entity."""
        model: ActivityModel = row.ActivityModel
        return Activity(
            id=model.id,
            title=model.title,
            description=model.description,
            date=model.date,
            time=model.time,
            end_time=model.end_time,
            place=model.place,
            location=model.location,
            latitude=model.latitude,
            longitude=model.longitude,
            capacity=model.capacity,
            joined=model.joined,
            comments=model.comments,
            views=model.views,
            image_url=model.image_url,
            image_name=model.image_name,
            category=model.category,
            is_active=model.is_active,
            author_id=model.author_id,
            created_at=model.created_at,
            updated_at=model.updated_at,
            author=author_from_row(model.author_id, row),
        )
