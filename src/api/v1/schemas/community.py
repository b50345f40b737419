"""Pydantic schemas for Community API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from api.v1.schemas.common import AuthorResponse, PaginationMeta, RowId


class MediaCreate(BaseModel):
    """A file to attach to a new post."""

    file_url: str = Field(..., min_length=1, max_length=500)
    file_type: str = Field("image", max_length=20)
    file_name: str | None = Field(None, max_length=255)
    file_size: int | None = Field(None, ge=0)
    mime_type: str | None = Field(None, max_length=100)


class PostCreate(BaseModel):
    """Schema for creating a Post."""

    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    is_published: bool = True
    media: list[MediaCreate] = Field(default_factory=list)


class PostUpdate(BaseModel):
    """Schema for updating a Post."""

    title: str | None = Field(None, min_length=1, max_length=255)
    content: str | None = Field(None, min_length=1)
    is_published: bool | None = None


class MediaResponse(BaseModel):
    """Schema for post media."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    file_url: str
    file_type: str
    file_name: str | None = None
    file_size: int | None = None
    mime_type: str | None = None


class CommentResponse(BaseModel):
    """Schema for a comment and its nested replies."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    post_id: int
    parent_id: int | None = None
    content: str
    author_id: int
    author: AuthorResponse | None = None
    created_at: datetime
    updated_at: datetime
    replies: list["CommentResponse"] = Field(default_factory=list)


class PostResponse(BaseModel):
    """Schema for Post response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    is_published: bool
    like_count: int
    comment_count: int
    view_count: int
    author_id: int
    author: AuthorResponse | None = None
    media: list[MediaResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class PostDetailData(PostResponse):
    """A post with its comment tree."""

    comments: list[CommentResponse] = Field(default_factory=list)


class PostListResponse(BaseModel):
    """Schema for a page of Posts."""

    success: bool = True
    data: list[PostResponse]
    pagination: PaginationMeta


class PostDetailResponse(BaseModel):
    """Schema for single Post."""

    success: bool = True
    data: PostDetailData


class CommentCreate(BaseModel):
    """Schema for creating a Comment."""

    post_id: RowId
    content: str = Field(..., min_length=1)
    parent_id: RowId | None = None


class CommentDetailResponse(BaseModel):
    """Schema for single Comment."""

    success: bool = True
    data: CommentResponse


class LikeToggle(BaseModel):
    """Schema for toggling a like. ``user_id`` defaults to the caller."""

    post_id: RowId
    user_id: RowId | None = None


class LikeData(BaseModel):
    """Like state of a user on a post."""

    model_config = ConfigDict(from_attributes=True)

    post_id: int
    user_id: int
    liked: bool


class LikeResponse(BaseModel):
    """Schema for like toggle / status."""

    success: bool = True
    data: LikeData
