"""Pydantic schemas for Activity API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from api.v1.schemas.common import AuthorResponse, PaginationMeta


class ActivityCreate(BaseModel):
    """Schema for creating an Activity."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    date: str = Field(..., min_length=1, max_length=50)
    time: str = Field(..., min_length=1, max_length=50)
    end_time: str | None = Field(None, max_length=50)
    place: str = Field(..., min_length=1, max_length=255)
    location: str | None = Field(None, max_length=255)
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    capacity: int = Field(..., gt=0)
    image_url: str | None = Field(None, max_length=500)
    image_name: str | None = Field(None, max_length=255)
    category: str | None = Field(None, max_length=50)


class ActivityUpdate(BaseModel):
    """Schema for updating an Activity. Only supplied fields change."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, min_length=1)
    date: str | None = Field(None, min_length=1, max_length=50)
    time: str | None = Field(None, min_length=1, max_length=50)
    end_time: str | None = Field(None, max_length=50)
    place: str | None = Field(None, min_length=1, max_length=255)
    location: str | None = Field(None, max_length=255)
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    capacity: int | None = Field(None, gt=0)
    image_url: str | None = Field(None, max_length=500)
    image_name: str | None = Field(None, max_length=255)
    category: str | None = Field(None, max_length=50)
    is_active: bool | None = None


class ActivityResponse(BaseModel):
    """Schema for Activity response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    date: str
    time: str
    end_time: str | None = None
    place: str
    location: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    capacity: int
    joined: int
    comments: int
    views: int
    image_url: str | None = None
    image_name: str | None = None
    category: str | None = None
    is_active: bool
    author_id: int
    author: AuthorResponse | None = None
    created_at: datetime
    updated_at: datetime


class ActivityListResponse(BaseModel):
    """Schema for a page of Activities."""

    success: bool = True
    data: list[ActivityResponse]
    pagination: PaginationMeta


class ActivityDetailResponse(BaseModel):
    """Schema for single Activity."""

    success: bool = True
    data: ActivityResponse


class ParticipantResponse(BaseModel):
    """Schema for a user who joined an activity."""

    model_config = ConfigDict(from_attributes=True)

    user: AuthorResponse
    joined_at: datetime


class ParticipantListResponse(BaseModel):
    """Schema for the participants of an activity."""

    success: bool = True
    data: list[ParticipantResponse]
