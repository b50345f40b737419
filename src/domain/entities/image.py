"""Stored image entity."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Image:
    """Image bytes persisted in the database.

    Metadata listings leave ``data`` empty and fill ``size`` from the
    database instead.
    """

    name: str
    mime: str
    data: bytes = b""
    size: int = 0
    id: int | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        if self.data and not self.size:
            self.size = len(self.data)
