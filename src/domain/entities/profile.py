"""Profile domain entities."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from domain.entities.user import User


@dataclass
class Profile:
    """Domain entity for a user's personal profile (1:1 with User)."""

    user_id: int
    full_name: str
    nickname: str | None = None
    gender: str | None = None
    date_of_birth: date | None = None
    address: str | None = None
    profile_image_url: str | None = None
    id: int | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at


@dataclass
class EmergencyContact:
    """Someone to call for a user."""

    user_id: int
    name: str
    phone: str
    relationship: str | None = None
    id: int | None = None


@dataclass
class UserProfile:
    """Aggregate read model: a user with profile and child collections."""

    user: User
    profile: Profile | None = None
    health_conditions: list[str] = field(default_factory=list)
    interests: list[str] = field(default_factory=list)
    emergency_contacts: list[EmergencyContact] = field(default_factory=list)


@dataclass
class ProfileUpdate:
    """Requested profile change.

    ``fields`` holds only the scalar columns the caller supplied. A child
    collection left as ``None`` is not touched; a list (even empty) replaces
    the stored rows.
    """

    full_name: str
    fields: dict[str, Any] = field(default_factory=dict)
    age: int | str | None = None
    health_conditions: list[str] | None = None
    interests: list[str] | None = None
    emergency_contacts: list[EmergencyContact] | None = None


def age_on(date_of_birth: date, today: date) -> int:
    """Full years elapsed between a birth date and ``today``."""
    years = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        years -= 1
    return years


def birth_date_for_age(age: int, today: date) -> date:
    """Approximate birth date: today's month/day, ``age`` years ago."""
    try:
        return today.replace(year=today.year - age)
    except ValueError:
        # Feb 29 in a non-leap target year
        return today.replace(year=today.year - age, day=28)
