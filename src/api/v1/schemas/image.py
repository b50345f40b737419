"""Pydantic schemas for Image API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from api.v1.schemas.common import PaginationMeta


class Base64Upload(BaseModel):
    """JSON upload body used by web clients."""

    model_config = ConfigDict(populate_by_name=True)

    file: str | None = None
    filename: str | None = Field(None, max_length=255)
    mime_type: str | None = Field(None, alias="mimeType")


class ImageResponse(BaseModel):
    """Schema for stored image metadata."""

    id: int
    name: str
    mime: str
    file_size: int
    created_at: datetime


class ImageDetailResponse(BaseModel):
    """Schema for single Image."""

    success: bool = True
    data: ImageResponse


class ImageListResponse(BaseModel):
    """Schema for a page of Images."""

    success: bool = True
    data: list[ImageResponse]
    pagination: PaginationMeta
