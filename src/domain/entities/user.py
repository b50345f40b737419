"""User domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum


class UserRole(StrEnum):
    """Account role. ADMIN may modify any resource."""

    USER = "USER"
    ORGANIZER = "ORGANIZER"
    ADMIN = "ADMIN"


class UserStatus(StrEnum):
    """Account lifecycle status."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"


@dataclass
class User:
    """Domain entity for a user account."""

    email: str
    password_hash: str = ""
    role: UserRole = UserRole.USER
    status: UserStatus = UserStatus.ACTIVE
    phone: str | None = None
    id: int | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True, slots=True)
class Actor:
    """The authenticated caller of a request."""

    id: int
    email: str
    role: UserRole = UserRole.USER

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def can_modify(self, owner_id: int) -> bool:
        """Owners and admins may change a resource."""
        return self.id == owner_id or self.is_admin


@dataclass(frozen=True, slots=True)
class AuthorSummary:
    """Read-only value object: who wrote something, as shown to clients."""

    user_id: int
    email: str
    full_name: str | None = None
    avatar_url: str | None = None

    @property
    def display_name(self) -> str:
        return self.full_name or self.email
