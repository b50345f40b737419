"""Volunteer request domain entities."""

from dataclasses import dataclass, field
from datetime import datetime

from domain.entities.user import AuthorSummary


@dataclass
class VolunteerPost:
    """A request for volunteer help that other users can support."""

    title: str
    description: str
    date_time: datetime
    user_id: int
    reward: str | None = None
    support_count: int = 0
    id: int | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)
    author: AuthorSummary | None = None


@dataclass
class VolunteerSupport:
    """One user's support of a volunteer request."""

    post_id: int
    user_id: int
    id: int | None = None
    supported_at: datetime = field(default_factory=datetime.utcnow)
