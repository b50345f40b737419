"""Profile API routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import PathId, get_profile_service
from api.v1.schemas.common import DeletedData, DeletedResponse
from api.v1.schemas.profile import (
    EmergencyContactSchema,
    ProfileData,
    ProfileResponse,
    ProfileUpdateRequest,
)
from core.rate_limit import limiter
from domain.entities.profile import EmergencyContact, ProfileUpdate, UserProfile
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["profiles"])

SCALAR_FIELDS = ("nickname", "gender", "address", "profile_image_url")


def _to_response(profile: UserProfile, service: ProfileService) -> ProfileResponse:
    details = profile.profile
    return ProfileResponse(
        data=ProfileData(
            user_id=profile.user.id,
            email=profile.user.email,
            full_name=details.full_name if details else None,
            nickname=details.nickname if details else None,
            gender=details.gender if details else None,
            date_of_birth=details.date_of_birth if details else None,
            age=service.age_of(profile),
            address=details.address if details else None,
            profile_image_url=details.profile_image_url if details else None,
            health_conditions=profile.health_conditions,
            interests=profile.interests,
            emergency_contacts=[
                EmergencyContactSchema.model_validate(c) for c in profile.emergency_contacts
            ],
        )
    )


@router.get(
    "/{user_id}",
    response_model=ProfileResponse,
    summary="Get a profile",
    responses={404: {"description": "User not found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_profile(
    request: Request,
    user_id: PathId,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get a user's profile with health info, interests and contacts."""
    profile = await service.get(user_id)
    return _to_response(profile, service)


@router.put(
    "/{user_id}",
    response_model=ProfileResponse,
    summary="Update a profile",
    responses={
        400: {"description": "Invalid full name or age"},
        403: {"description": "Not your profile"},
        404: {"description": "User not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_profile(
    request: Request,
    user_id: PathId,
    body: ProfileUpdateRequest,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Replace the profile and any supplied collections in one transaction."""
    supplied = body.model_dump(exclude_unset=True)
    update = ProfileUpdate(
        full_name=body.full_name,
        fields={name: supplied[name] for name in SCALAR_FIELDS if name in supplied},
        age=body.age,
        health_conditions=body.health_conditions,
        interests=body.interests,
        emergency_contacts=(
            [
                EmergencyContact(
                    user_id=user_id,
                    name=c.name,
                    phone=c.phone,
                    relationship=c.relationship,
                )
                for c in body.emergency_contacts
            ]
            if body.emergency_contacts is not None
            else None
        ),
    )
    profile = await service.update(user_id, user, update)
    return _to_response(profile, service)


@router.delete(
    "/{user_id}",
    response_model=DeletedResponse,
    summary="Delete a profile",
    responses={
        403: {"description": "Not your profile"},
        404: {"description": "Profile not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_profile(
    request: Request,
    user_id: PathId,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> DeletedResponse:
    """Delete the profile with its health info, interests and contacts."""
    await service.delete(user_id, user)
    return DeletedResponse(data=DeletedData(id=user_id))
