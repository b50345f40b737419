"""Image upload and serving routes."""

from typing import Any

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import ValidationError as PydanticValidationError
from starlette.datastructures import UploadFile

from api.v1.dependencies import PathId, get_image_service
from api.v1.schemas.common import PaginationMeta
from api.v1.schemas.image import (
    Base64Upload,
    ImageDetailResponse,
    ImageListResponse,
    ImageResponse,
)
from core.exceptions import ValidationError
from core.rate_limit import limiter
from domain.entities.image import Image
from domain.entities.pagination import PageRequest
from domain.services.image_service import ImageService

router = APIRouter(prefix="/images", tags=["images"])

IMAGE_LIST_DEFAULT_LIMIT = 50
IMAGE_LIST_MAX_LIMIT = 100
UPLOAD_FIELDS = ("file", "image")


def _to_response(image: Image) -> ImageResponse:
    return ImageResponse(
        id=image.id,
        name=image.name,
        mime=image.mime,
        file_size=image.size,
        created_at=image.created_at,
    )


def _inline_disposition(name: str) -> str:
    # Header values must be latin-1; quotes would end the filename early
    safe = name.replace('"', "").replace("\r", "").replace("\n", "")
    safe = safe.encode("latin-1", "replace").decode("latin-1")
    return f'inline; filename="{safe}"'


async def _read_json_upload(request: Request) -> Base64Upload:
    try:
        payload: Any = await request.json()
    except ValueError:
        raise ValidationError("Request body is not valid JSON") from None
    try:
        return Base64Upload.model_validate(payload)
    except PydanticValidationError:
        raise ValidationError("Invalid upload body", field="file") from None


@router.post(
    "",
    response_model=ImageDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload an image",
    responses={
        400: {"description": "No file or undecodable data"},
        413: {"description": "File larger than the upload limit"},
        415: {"description": "Not an accepted image type"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def upload_image(
    request: Request,
    service: ImageService = Depends(get_image_service),
) -> ImageDetailResponse:
    """Store an image sent as multipart form data (``file`` or ``image``) or base64 JSON."""
    content_type = request.headers.get("content-type", "").lower()

    if content_type.startswith("application/json"):
        body = await _read_json_upload(request)
        image = await service.upload_base64(body.file, body.filename, body.mime_type)
        return ImageDetailResponse(data=_to_response(image))

    if not content_type.startswith("multipart/form-data"):
        raise ValidationError("Expected multipart/form-data or application/json")

    form = await request.form()
    try:
        upload = next(
            (form[field] for field in UPLOAD_FIELDS if isinstance(form.get(field), UploadFile)),
            None,
        )
        if not isinstance(upload, UploadFile):
            raise ValidationError("No file uploaded", field="file")
        # One byte past the cap is enough to reject without buffering the rest
        data = await upload.read(service.max_bytes + 1)
        image = await service.upload(data, upload.filename, upload.content_type)
    finally:
        await form.close()

    return ImageDetailResponse(data=_to_response(image))


@router.get(
    "",
    response_model=ImageListResponse,
    summary="List images",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_images(
    request: Request,
    page: int = 1,
    limit: int = IMAGE_LIST_DEFAULT_LIMIT,
    service: ImageService = Depends(get_image_service),
) -> ImageListResponse:
    """Get image metadata (no bytes), newest first."""
    if page < 1:
        raise ValidationError("page must be at least 1", field="page")
    if limit < 1:
        raise ValidationError("limit must be at least 1", field="limit")

    result = await service.list_images(
        PageRequest(page=page, limit=min(limit, IMAGE_LIST_MAX_LIMIT))
    )
    return ImageListResponse(
        data=[_to_response(image) for image in result.items],
        pagination=PaginationMeta.from_page(result),
    )


@router.get(
    "/{image_id}",
    response_class=Response,
    summary="Serve an image",
    responses={
        200: {"content": {"image/*": {}}, "description": "The raw image bytes"},
        404: {"description": "Image not found"},
    },
)
@limiter.limit("60/minute")  # type: ignore[untyped-decorator]
async def get_image(
    request: Request,
    image_id: PathId,
    service: ImageService = Depends(get_image_service),
) -> Response:
    """Return the stored bytes with their content type."""
    image = await service.get(image_id)
    return Response(
        content=image.data,
        media_type=image.mime,
        headers={
            "Cache-Control": "public, max-age=60",
            "Content-Disposition": _inline_disposition(image.name),
        },
    )
