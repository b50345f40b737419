"""Common Pydantic schemas shared across the API."""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.pagination import Page
from infrastructure.database.models import MAX_ROW_ID

RowId = Annotated[int, Field(ge=1, le=MAX_ROW_ID)]


class ErrorResponse(BaseModel):
    """Standardized error envelope."""

    success: bool = False
    error: str
    error_code: str
    details: Any | None = None


class PaginationMeta(BaseModel):
    """Pagination block of list envelopes."""

    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int = Field(..., alias="totalPages")

    @classmethod
    def from_page(cls, page: Page[Any]) -> "PaginationMeta":
        return cls(
            page=page.page,
            limit=page.limit,
            total=page.total,
            total_pages=page.total_pages,
        )


class AuthorResponse(BaseModel):
    """Public identity of a content author."""

    model_config = ConfigDict(from_attributes=True)

    user_id: int
    email: str
    full_name: str | None = None
    display_name: str
    avatar_url: str | None = None


class DeletedData(BaseModel):
    """Payload of delete responses."""

    id: int
    deleted: bool = True


class DeletedResponse(BaseModel):
    """Envelope for delete responses."""

    success: bool = True
    data: DeletedData
