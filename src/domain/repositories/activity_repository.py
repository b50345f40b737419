"""Activity repository protocol."""

from typing import Protocol

from domain.entities.activity import Activity, Participant
from domain.entities.pagination import PageRequest


class IActivityRepository(Protocol):
    """Repository interface for Activity entities and their joins."""

    async def list_active(self, page: PageRequest) -> tuple[list[Activity], int]:
        """Get one page of active activities (newest first) and the total."""
        ...

    async def get(self, id: int) -> Activity | None:
        """Get an activity by ID."""
        ...

    async def create(self, activity: Activity) -> Activity:
        """Create a new activity."""
        ...

    async def update(self, activity: Activity) -> Activity:
        """Update an existing activity."""
        ...

    async def delete(self, id: int) -> bool:
        """Delete an activity with its joins."""
        ...

    async def increment_views(self, id: int) -> bool:
        """Add one view. Returns False if the activity does not exist."""
        ...

    async def has_joined(self, activity_id: int, user_id: int) -> bool:
        """Check whether a join row exists."""
        ...

    async def try_increment_joined(self, activity_id: int) -> bool:
        """Add one to ``joined`` only while it is below capacity."""
        ...

    async def add_join(self, activity_id: int, user_id: int) -> None:
        """Insert a join row. Raises DuplicateEntryError if it exists."""
        ...

    async def remove_join(self, activity_id: int, user_id: int) -> int:
        """Delete a join row and return the number of rows removed."""
        ...

    async def adjust_joined(self, activity_id: int, delta: int) -> None:
        """Add ``delta`` to the joined counter."""
        ...

    async def list_participants(self, activity_id: int) -> list[Participant]:
        """Get joined users in join order."""
        ...
