"""Activity API routes."""

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import Page, PathId, get_activity_service
from api.v1.schemas.activity import (
    ActivityCreate,
    ActivityDetailResponse,
    ActivityListResponse,
    ActivityResponse,
    ActivityUpdate,
    ParticipantListResponse,
    ParticipantResponse,
)
from api.v1.schemas.common import DeletedData, DeletedResponse, PaginationMeta
from core.rate_limit import limiter
from domain.services.activity_service import ActivityService

router = APIRouter(prefix="/activities", tags=["activities"])


@router.get(
    "",
    response_model=ActivityListResponse,
    summary="List active activities",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_activities(
    request: Request,
    page: Page,
    service: ActivityService = Depends(get_activity_service),
) -> ActivityListResponse:
    """Get active activities, newest first."""
    result = await service.list_active(page)
    return ActivityListResponse(
        data=[ActivityResponse.model_validate(a) for a in result.items],
        pagination=PaginationMeta.from_page(result),
    )


@router.post(
    "",
    response_model=ActivityDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an activity",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_activity(
    request: Request,
    body: ActivityCreate,
    user: CurrentUser,
    service: ActivityService = Depends(get_activity_service),
) -> ActivityDetailResponse:
    """Create an activity authored by the caller."""
    activity = await service.create(user, **body.model_dump())
    return ActivityDetailResponse(data=ActivityResponse.model_validate(activity))


@router.get(
    "/{activity_id}",
    response_model=ActivityDetailResponse,
    summary="Get an activity",
    responses={404: {"description": "Activity not found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_activity(
    request: Request,
    activity_id: PathId,
    service: ActivityService = Depends(get_activity_service),
) -> ActivityDetailResponse:
    """Get a single activity with its author."""
    activity = await service.get_by_id(activity_id)
    return ActivityDetailResponse(data=ActivityResponse.model_validate(activity))


@router.put(
    "/{activity_id}",
    response_model=ActivityDetailResponse,
    summary="Update an activity",
    responses={
        403: {"description": "Not the author"},
        404: {"description": "Activity not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_activity(
    request: Request,
    activity_id: PathId,
    body: ActivityUpdate,
    user: CurrentUser,
    service: ActivityService = Depends(get_activity_service),
) -> ActivityDetailResponse:
    """Update the supplied fields of an activity."""
    activity = await service.update(activity_id, user, body.model_dump(exclude_unset=True))
    return ActivityDetailResponse(data=ActivityResponse.model_validate(activity))


@router.delete(
    "/{activity_id}",
    response_model=DeletedResponse,
    summary="Delete an activity",
    responses={
        403: {"description": "Not the author"},
        404: {"description": "Activity not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_activity(
    request: Request,
    activity_id: PathId,
    user: CurrentUser,
    service: ActivityService = Depends(get_activity_service),
) -> DeletedResponse:
    """Delete an activity and its participations."""
    await service.delete(activity_id, user)
    return DeletedResponse(data=DeletedData(id=activity_id))


@router.post(
    "/{activity_id}/views",
    response_model=ActivityDetailResponse,
    summary="Count a view",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def increment_activity_view(
    request: Request,
    activity_id: PathId,
    service: ActivityService = Depends(get_activity_service),
) -> ActivityDetailResponse:
    """Increment the view counter."""
    activity = await service.increment_view(activity_id)
    return ActivityDetailResponse(data=ActivityResponse.model_validate(activity))


@router.post(
    "/{activity_id}/join",
    response_model=ActivityDetailResponse,
    summary="Join an activity",
    responses={
        400: {"description": "Inactive, full or already joined"},
        404: {"description": "Activity not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def join_activity(
    request: Request,
    activity_id: PathId,
    user: CurrentUser,
    service: ActivityService = Depends(get_activity_service),
) -> ActivityDetailResponse:
    """Join an activity as the caller."""
    activity = await service.join(activity_id, user)
    return ActivityDetailResponse(data=ActivityResponse.model_validate(activity))


@router.post(
    "/{activity_id}/leave",
    response_model=ActivityDetailResponse,
    summary="Leave an activity",
    responses={
        400: {"description": "Not joined"},
        404: {"description": "Activity not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def leave_activity(
    request: Request,
    activity_id: PathId,
    user: CurrentUser,
    service: ActivityService = Depends(get_activity_service),
) -> ActivityDetailResponse:
    """Leave an activity the caller joined."""
    activity = await service.leave(activity_id, user)
    return ActivityDetailResponse(data=ActivityResponse.model_validate(activity))


@router.get(
    "/{activity_id}/participants",
    response_model=ParticipantListResponse,
    summary="List participants",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_participants(
    request: Request,
    activity_id: PathId,
    service: ActivityService = Depends(get_activity_service),
) -> ParticipantListResponse:
    """Get the users who joined, in join order."""
    participants = await service.get_participants(activity_id)
    return ParticipantListResponse(
        data=[ParticipantResponse.model_validate(p) for p in participants]
    )
