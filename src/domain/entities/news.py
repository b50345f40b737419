"""News domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from domain.entities.user import AuthorSummary


class NewsPriority(StrEnum):
    """How prominently an announcement is shown."""

    IMPORTANT = "important"
    CAUTION = "caution"
    NOTICE = "notice"


@dataclass
class News:
    """Domain entity for a news item or announcement."""

    title: str
    content: str
    author_id: int
    priority: NewsPriority = NewsPriority.NOTICE
    image_url: str | None = None
    image_name: str | None = None
    date_time: str | None = None
    disclaimer: str | None = None
    is_published: bool = True
    view_count: int = 0
    id: int | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)
    author: AuthorSummary | None = None
