"""Pydantic schemas for Volunteer API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from api.v1.schemas.common import AuthorResponse, PaginationMeta


class VolunteerPostWrite(BaseModel):
    """Schema for creating or replacing a volunteer post.

    Accepts ``dateTime`` (mobile clients) or ``date_time``.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    date_time: datetime = Field(..., alias="dateTime")
    reward: str | None = Field(None, max_length=255)


class VolunteerPostResponse(BaseModel):
    """Schema for VolunteerPost response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    date_time: datetime
    reward: str | None = None
    user_id: int
    support_count: int
    author: AuthorResponse | None = None
    created_at: datetime
    updated_at: datetime


class VolunteerPostListResponse(BaseModel):
    """Schema for a page of VolunteerPosts."""

    success: bool = True
    data: list[VolunteerPostResponse]
    pagination: PaginationMeta


class VolunteerPostDetailResponse(BaseModel):
    """Schema for single VolunteerPost."""

    success: bool = True
    data: VolunteerPostResponse


class SupportData(BaseModel):
    """Support state of the caller on a post."""

    model_config = ConfigDict(from_attributes=True)

    post_id: int
    user_id: int
    supported: bool
    support_count: int


class SupportResponse(BaseModel):
    """Schema for support / unsupport / status."""

    success: bool = True
    data: SupportData
