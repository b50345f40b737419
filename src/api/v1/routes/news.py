"""News API routes."""

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import Page, PathId, get_news_service
from api.v1.schemas.common import DeletedData, DeletedResponse, PaginationMeta
from api.v1.schemas.news import (
    NewsCreate,
    NewsDetailResponse,
    NewsListResponse,
    NewsResponse,
    NewsUpdate,
)
from core.rate_limit import limiter
from domain.services.news_service import NewsService

router = APIRouter(prefix="/news", tags=["news"])


@router.get(
    "",
    response_model=NewsListResponse,
    summary="List published news",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_news(
    request: Request,
    page: Page,
    service: NewsService = Depends(get_news_service),
) -> NewsListResponse:
    """Get published news, newest first."""
    result = await service.list_published(page)
    return NewsListResponse(
        data=[NewsResponse.model_validate(n) for n in result.items],
        pagination=PaginationMeta.from_page(result),
    )


@router.post(
    "",
    response_model=NewsDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a news item",
    responses={400: {"description": "Invalid priority"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_news(
    request: Request,
    body: NewsCreate,
    user: CurrentUser,
    service: NewsService = Depends(get_news_service),
) -> NewsDetailResponse:
    """Create a news item authored by the caller."""
    news = await service.create(user, **body.model_dump())
    return NewsDetailResponse(data=NewsResponse.model_validate(news))


@router.get(
    "/{news_id}",
    response_model=NewsDetailResponse,
    summary="Get a news item",
    responses={404: {"description": "News not found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_news(
    request: Request,
    news_id: PathId,
    service: NewsService = Depends(get_news_service),
) -> NewsDetailResponse:
    """Get a single news item."""
    news = await service.get_by_id(news_id)
    return NewsDetailResponse(data=NewsResponse.model_validate(news))


@router.put(
    "/{news_id}",
    response_model=NewsDetailResponse,
    summary="Update a news item",
    responses={
        403: {"description": "Not the author"},
        404: {"description": "News not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_news(
    request: Request,
    news_id: PathId,
    body: NewsUpdate,
    user: CurrentUser,
    service: NewsService = Depends(get_news_service),
) -> NewsDetailResponse:
    """Update the supplied fields of a news item."""
    news = await service.update(news_id, user, body.model_dump(exclude_unset=True))
    return NewsDetailResponse(data=NewsResponse.model_validate(news))


@router.delete(
    "/{news_id}",
    response_model=DeletedResponse,
    summary="Delete a news item",
    responses={
        403: {"description": "Not the author"},
        404: {"description": "News not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_news(
    request: Request,
    news_id: PathId,
    user: CurrentUser,
    service: NewsService = Depends(get_news_service),
) -> DeletedResponse:
    """Delete a news item."""
    await service.delete(news_id, user)
    return DeletedResponse(data=DeletedData(id=news_id))


@router.post(
    "/{news_id}/views",
    response_model=NewsDetailResponse,
    summary="Count a view",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def increment_news_view(
    request: Request,
    news_id: PathId,
    service: NewsService = Depends(get_news_service),
) -> NewsDetailResponse:
    """Increment the view counter."""
    news = await service.increment_view(news_id)
    return NewsDetailResponse(data=NewsResponse.model_validate(news))
