"""Volunteer request API routes."""

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import Page, PathId, get_volunteer_service
from api.v1.schemas.common import DeletedData, DeletedResponse, PaginationMeta
from api.v1.schemas.volunteer import (
    SupportData,
    SupportResponse,
    VolunteerPostDetailResponse,
    VolunteerPostListResponse,
    VolunteerPostResponse,
    VolunteerPostWrite,
)
from core.rate_limit import limiter
from domain.services.volunteer_service import VolunteerService

router = APIRouter(prefix="/volunteer", tags=["volunteer"])


@router.get(
    "/posts",
    response_model=VolunteerPostListResponse,
    summary="List volunteer posts",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_volunteer_posts(
    request: Request,
    page: Page,
    service: VolunteerService = Depends(get_volunteer_service),
) -> VolunteerPostListResponse:
    """Get volunteer requests, newest first."""
    result = await service.list_posts(page)
    return VolunteerPostListResponse(
        data=[VolunteerPostResponse.model_validate(p) for p in result.items],
        pagination=PaginationMeta.from_page(result),
    )


@router.post(
    "/posts",
    response_model=VolunteerPostDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a volunteer post",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_volunteer_post(
    request: Request,
    body: VolunteerPostWrite,
    user: CurrentUser,
    service: VolunteerService = Depends(get_volunteer_service),
) -> VolunteerPostDetailResponse:
    """Ask for volunteer help."""
    post = await service.create_post(
        user,
        title=body.title,
        description=body.description,
        date_time=body.date_time,
        reward=body.reward,
    )
    return VolunteerPostDetailResponse(data=VolunteerPostResponse.model_validate(post))


@router.get(
    "/posts/{post_id}",
    response_model=VolunteerPostDetailResponse,
    summary="Get a volunteer post",
    responses={404: {"description": "Post not found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_volunteer_post(
    request: Request,
    post_id: PathId,
    service: VolunteerService = Depends(get_volunteer_service),
) -> VolunteerPostDetailResponse:
    """Get a single volunteer request."""
    post = await service.get_post(post_id)
    return VolunteerPostDetailResponse(data=VolunteerPostResponse.model_validate(post))


@router.put(
    "/posts/{post_id}",
    response_model=VolunteerPostDetailResponse,
    summary="Update a volunteer post",
    responses={
        403: {"description": "Not the owner"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_volunteer_post(
    request: Request,
    post_id: PathId,
    body: VolunteerPostWrite,
    user: CurrentUser,
    service: VolunteerService = Depends(get_volunteer_service),
) -> VolunteerPostDetailResponse:
    """Replace the content of a volunteer request."""
    post = await service.update_post(
        post_id,
        user,
        title=body.title,
        description=body.description,
        date_time=body.date_time,
        reward=body.reward,
    )
    return VolunteerPostDetailResponse(data=VolunteerPostResponse.model_validate(post))


@router.delete(
    "/posts/{post_id}",
    response_model=DeletedResponse,
    summary="Delete a volunteer post",
    responses={
        403: {"description": "Not the owner"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_volunteer_post(
    request: Request,
    post_id: PathId,
    user: CurrentUser,
    service: VolunteerService = Depends(get_volunteer_service),
) -> DeletedResponse:
    """Delete a volunteer request with its supports."""
    await service.delete_post(post_id, user)
    return DeletedResponse(data=DeletedData(id=post_id))


@router.get(
    "/posts/{post_id}/support",
    response_model=SupportResponse,
    summary="Get support status",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_support_status(
    request: Request,
    post_id: PathId,
    user: CurrentUser,
    service: VolunteerService = Depends(get_volunteer_service),
) -> SupportResponse:
    """Whether the caller supports this request."""
    result = await service.support_status(post_id, user)
    return SupportResponse(data=SupportData.model_validate(result))


@router.post(
    "/posts/{post_id}/support",
    response_model=SupportResponse,
    summary="Support a volunteer post",
    responses={400: {"description": "Already supported"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def support_post(
    request: Request,
    post_id: PathId,
    user: CurrentUser,
    service: VolunteerService = Depends(get_volunteer_service),
) -> SupportResponse:
    """Add the caller's support."""
    result = await service.support(post_id, user)
    return SupportResponse(data=SupportData.model_validate(result))


@router.delete(
    "/posts/{post_id}/support",
    response_model=SupportResponse,
    summary="Withdraw support",
    responses={400: {"description": "Not supported"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def unsupport_post(
    request: Request,
    post_id: PathId,
    user: CurrentUser,
    service: VolunteerService = Depends(get_volunteer_service),
) -> SupportResponse:
    """Remove the caller's support."""
    result = await service.unsupport(post_id, user)
    return SupportResponse(data=SupportData.model_validate(result))
