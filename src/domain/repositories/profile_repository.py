"""Profile repository protocols."""

from typing import Any, Protocol

from domain.entities.profile import EmergencyContact, Profile


class IProfileRepository(Protocol):
    """Repository interface for a user's profile and its child collections."""

    async def get(self, user_id: int) -> Profile | None:
        """Get the profile of a user."""
        ...

    async def upsert(self, user_id: int, full_name: str, fields: dict[str, Any]) -> Profile:
        """Create the profile or overwrite only the given columns."""
        ...

    async def delete(self, user_id: int) -> bool:
        """Delete the profile row and all child rows of the user."""
        ...

    async def get_health_conditions(self, user_id: int) -> list[str]:
        """Get health condition descriptions, oldest first."""
        ...

    async def replace_health_conditions(self, user_id: int, conditions: list[str]) -> None:
        """Delete all health rows of the user, then insert the given set."""
        ...

    async def get_emergency_contacts(self, user_id: int) -> list[EmergencyContact]:
        """Get emergency contacts, oldest first."""
        ...

    async def replace_emergency_contacts(
        self, user_id: int, contacts: list[EmergencyContact]
    ) -> None:
        """Delete all contacts of the user, then insert the given set."""
        ...

    async def get_interest_names(self, user_id: int) -> list[str]:
        """Get the names of the user's interests."""
        ...

    async def clear_interests(self, user_id: int) -> None:
        """Remove all interest links of the user."""
        ...

    async def add_interest(self, user_id: int, interest_id: int) -> None:
        """Link an interest to the user."""
        ...


class IInterestRepository(Protocol):
    """Repository interface for the shared Interest catalogue."""

    async def get_or_create_id(self, name: str) -> int:
        """Return the id of the interest with this name, creating it if absent."""
        ...
