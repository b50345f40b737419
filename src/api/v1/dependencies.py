"""Dependency injection factories for API v1."""

from typing import Annotated

from fastapi import Depends, Path, Query

from api.dependencies.database import UowFactory, get_uow_factory
from core.config import settings
from domain.entities.pagination import PageRequest
from domain.services.activity_service import ActivityService
from domain.services.community_service import CommunityService
from domain.services.image_service import ImageService
from domain.services.news_service import NewsService
from domain.services.profile_service import ProfileService
from domain.services.volunteer_service import VolunteerService
from infrastructure.database.models import MAX_ROW_ID


def get_page(
    page: Annotated[int, Query(ge=1, le=MAX_ROW_ID, description="1-based page number")] = 1,
    limit: Annotated[int | None, Query(ge=1, description="Page size")] = None,
) -> PageRequest:
    """Pagination query parameters. Oversized limits are clamped."""
    size = settings.default_page_size if limit is None else limit
    return PageRequest(page=page, limit=min(size, settings.max_page_size))


def get_activity_service(uow_factory: UowFactory = Depends(get_uow_factory)) -> ActivityService:
    """Get Activity service instance."""
    return ActivityService(uow_factory)


def get_news_service(uow_factory: UowFactory = Depends(get_uow_factory)) -> NewsService:
    """Get News service instance."""
    return NewsService(uow_factory)


def get_community_service(
    uow_factory: UowFactory = Depends(get_uow_factory),
) -> CommunityService:
    """Get Community service instance."""
    return CommunityService(uow_factory)


def get_volunteer_service(
    uow_factory: UowFactory = Depends(get_uow_factory),
) -> VolunteerService:
    """Get Volunteer service instance."""
    return VolunteerService(uow_factory)


def get_profile_service(uow_factory: UowFactory = Depends(get_uow_factory)) -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(uow_factory)


def get_image_service(uow_factory: UowFactory = Depends(get_uow_factory)) -> ImageService:
    """Get Image service instance."""
    return ImageService(
        uow_factory,
        allowed_types=settings.allowed_image_types_list,
        max_bytes=settings.max_upload_bytes,
    )


Page = Annotated[PageRequest, Depends(get_page)]
PathId = Annotated[int, Path(ge=1, le=MAX_ROW_ID)]
