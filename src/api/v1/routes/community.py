"""Community board API routes."""

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentUser, OptionalUser
from api.v1.dependencies import Page, PathId, get_community_service
from api.v1.schemas.common import DeletedData, DeletedResponse, PaginationMeta
from api.v1.schemas.community import (
    CommentCreate,
    CommentDetailResponse,
    CommentResponse,
    LikeData,
    LikeResponse,
    LikeToggle,
    PostCreate,
    PostDetailData,
    PostDetailResponse,
    PostListResponse,
    PostResponse,
    PostUpdate,
)
from core.exceptions import ValidationError
from core.rate_limit import limiter
from domain.entities.community import CommunityMedia
from domain.services.community_service import CommunityService
from infrastructure.database.models import MAX_ROW_ID

router = APIRouter(prefix="/community", tags=["community"])


@router.get(
    "/posts",
    response_model=PostListResponse,
    summary="List posts",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_posts(
    request: Request,
    page: Page,
    service: CommunityService = Depends(get_community_service),
) -> PostListResponse:
    """Get published posts with media, newest first."""
    result = await service.list_posts(page)
    return PostListResponse(
        data=[PostResponse.model_validate(p) for p in result.items],
        pagination=PaginationMeta.from_page(result),
    )


@router.post(
    "/posts",
    response_model=PostDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_post(
    request: Request,
    body: PostCreate,
    user: CurrentUser,
    service: CommunityService = Depends(get_community_service),
) -> PostDetailResponse:
    """Create a post, optionally with attached media."""
    post = await service.create_post(
        user,
        title=body.title,
        content=body.content,
        is_published=body.is_published,
        media=[CommunityMedia(**m.model_dump()) for m in body.media],
    )
    return PostDetailResponse(data=PostDetailData.model_validate(post))


@router.get(
    "/posts/{post_id}",
    response_model=PostDetailResponse,
    summary="Get a post",
    responses={404: {"description": "Post not found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_post(
    request: Request,
    post_id: PathId,
    service: CommunityService = Depends(get_community_service),
) -> PostDetailResponse:
    """Get a post with media and threaded comments. Counts one view."""
    post = await service.get_post(post_id)
    return PostDetailResponse(data=PostDetailData.model_validate(post))


@router.put(
    "/posts/{post_id}",
    response_model=PostDetailResponse,
    summary="Update a post",
    responses={
        403: {"description": "Not the author"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_post(
    request: Request,
    post_id: PathId,
    body: PostUpdate,
    user: CurrentUser,
    service: CommunityService = Depends(get_community_service),
) -> PostDetailResponse:
    """Update title, content or published flag."""
    post = await service.update_post(post_id, user, body.model_dump(exclude_unset=True))
    return PostDetailResponse(data=PostDetailData.model_validate(post))


@router.delete(
    "/posts/{post_id}",
    response_model=DeletedResponse,
    summary="Delete a post",
    responses={
        403: {"description": "Not the author"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_post(
    request: Request,
    post_id: PathId,
    user: CurrentUser,
    service: CommunityService = Depends(get_community_service),
) -> DeletedResponse:
    """Delete a post with its media, comments and likes."""
    await service.delete_post(post_id, user)
    return DeletedResponse(data=DeletedData(id=post_id))


@router.post(
    "/comments",
    response_model=CommentDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a post",
    responses={404: {"description": "Post or parent comment not found"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_comment(
    request: Request,
    body: CommentCreate,
    user: CurrentUser,
    service: CommunityService = Depends(get_community_service),
) -> CommentDetailResponse:
    """Add a comment or a reply (``parent_id``)."""
    comment = await service.add_comment(
        user,
        post_id=body.post_id,
        content=body.content,
        parent_id=body.parent_id,
    )
    return CommentDetailResponse(data=CommentResponse.model_validate(comment))


@router.delete(
    "/comments/{comment_id}",
    response_model=DeletedResponse,
    summary="Delete a comment",
    responses={
        403: {"description": "Not the author"},
        404: {"description": "Comment not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_comment(
    request: Request,
    comment_id: PathId,
    user: CurrentUser,
    service: CommunityService = Depends(get_community_service),
) -> DeletedResponse:
    """Delete a comment together with its replies."""
    await service.delete_comment(comment_id, user)
    return DeletedResponse(data=DeletedData(id=comment_id))


@router.post(
    "/likes",
    response_model=LikeResponse,
    summary="Toggle a like",
    responses={404: {"description": "Post not found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def toggle_like(
    request: Request,
    body: LikeToggle,
    user: CurrentUser,
    service: CommunityService = Depends(get_community_service),
) -> LikeResponse:
    """Like the post if not yet liked, otherwise remove the like."""
    result = await service.toggle_like(user, body.post_id, body.user_id)
    return LikeResponse(data=LikeData.model_validate(result))


@router.get(
    "/likes",
    response_model=LikeResponse,
    summary="Get like status",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def like_status(
    request: Request,
    user: OptionalUser,
    post_id: int = Query(..., ge=1, le=MAX_ROW_ID),
    user_id: int | None = Query(None, ge=1, le=MAX_ROW_ID),
    service: CommunityService = Depends(get_community_service),
) -> LikeResponse:
    """Whether ``user_id`` (default: the caller) has liked the post."""
    target = user_id if user_id is not None else (user.id if user else None)
    if target is None:
        raise ValidationError("user_id is required", field="user_id")
    result = await service.like_status(post_id, target)
    return LikeResponse(data=LikeData.model_validate(result))
