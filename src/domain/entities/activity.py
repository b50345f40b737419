"""Activity domain entities."""

from dataclasses import dataclass, field
from datetime import datetime

from domain.entities.user import AuthorSummary


@dataclass
class Activity:
    """Domain entity for a community activity users can join."""

    title: str
    description: str
    date: str
    time: str
    place: str
    capacity: int
    author_id: int
    end_time: str | None = None
    location: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    image_url: str | None = None
    image_name: str | None = None
    category: str | None = None
    joined: int = 0
    comments: int = 0
    views: int = 0
    is_active: bool = True
    id: int | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)
    author: AuthorSummary | None = None

    @property
    def is_full(self) -> bool:
        return self.joined >= self.capacity


@dataclass(frozen=True, slots=True)
class Participant:
    """A user who joined an activity."""

    user: AuthorSummary
    joined_at: datetime
