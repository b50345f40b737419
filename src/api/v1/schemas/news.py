"""Pydantic schemas for News API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from api.v1.schemas.common import AuthorResponse, PaginationMeta
from domain.entities.news import NewsPriority


class NewsCreate(BaseModel):
    """Schema for creating a News item. Priority is checked by the service."""

    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    priority: str | None = None
    image_url: str | None = Field(None, max_length=500)
    image_name: str | None = Field(None, max_length=255)
    date_time: str | None = Field(None, max_length=100)
    disclaimer: str | None = None
    is_published: bool = True


class NewsUpdate(BaseModel):
    """Schema for updating a News item."""

    title: str | None = Field(None, min_length=1, max_length=255)
    content: str | None = Field(None, min_length=1)
    priority: str | None = None
    image_url: str | None = Field(None, max_length=500)
    image_name: str | None = Field(None, max_length=255)
    date_time: str | None = Field(None, max_length=100)
    disclaimer: str | None = None
    is_published: bool | None = None


class NewsResponse(BaseModel):
    """Schema for News response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    priority: NewsPriority
    image_url: str | None = None
    image_name: str | None = None
    date_time: str | None = None
    disclaimer: str | None = None
    is_published: bool
    view_count: int
    author_id: int
    author: AuthorResponse | None = None
    created_at: datetime
    updated_at: datetime


class NewsListResponse(BaseModel):
    """Schema for a page of News."""

    success: bool = True
    data: list[NewsResponse]
    pagination: PaginationMeta


class NewsDetailResponse(BaseModel):
    """Schema for single News item."""

    success: bool = True
    data: NewsResponse
