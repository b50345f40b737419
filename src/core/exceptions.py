"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"

    # Not found errors (404)
    USER_NOT_FOUND = "USER_NOT_FOUND"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    ACTIVITY_NOT_FOUND = "ACTIVITY_NOT_FOUND"
    NEWS_NOT_FOUND = "NEWS_NOT_FOUND"
    POST_NOT_FOUND = "POST_NOT_FOUND"
    COMMENT_NOT_FOUND = "COMMENT_NOT_FOUND"
    VOLUNTEER_POST_NOT_FOUND = "VOLUNTEER_POST_NOT_FOUND"
    IMAGE_NOT_FOUND = "IMAGE_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_PRIORITY = "INVALID_PRIORITY"
    ACTIVITY_INACTIVE = "ACTIVITY_INACTIVE"
    ACTIVITY_FULL = "ACTIVITY_FULL"
    ALREADY_JOINED = "ALREADY_JOINED"
    NOT_JOINED = "NOT_JOINED"
    ALREADY_SUPPORTED = "ALREADY_SUPPORTED"
    NOT_SUPPORTED = "NOT_SUPPORTED"

    # Upload errors
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
    UNSUPPORTED_MEDIA_TYPE = "UNSUPPORTED_MEDIA_TYPE"

    # Conflict errors (409)
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ValidationError(AppException):
    """A request field is missing or invalid."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=message,
            status_code=400,
            details={"field": field} if field else None,
        )


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class AuthorizationError(AppException):
    """Authorization failed."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(
            error_code=ErrorCode.FORBIDDEN,
            message=message,
            status_code=403,
        )


class NotFoundError(AppException):
    """Base class for missing resources."""

    def __init__(self, error_code: ErrorCode, resource: str, key: str, value: int) -> None:
        super().__init__(
            error_code=error_code,
            message=f"{resource} not found: {value}",
            status_code=404,
            details={key: value},
        )


class UserNotFoundError(NotFoundError):
    """User not found."""

    def __init__(self, user_id: int) -> None:
        super().__init__(ErrorCode.USER_NOT_FOUND, "User", "user_id", user_id)


class ProfileNotFoundError(NotFoundError):
    """Profile not found."""

    def __init__(self, user_id: int) -> None:
        super().__init__(ErrorCode.PROFILE_NOT_FOUND, "Profile", "user_id", user_id)


class ActivityNotFoundError(NotFoundError):
    """Activity not found."""

    def __init__(self, activity_id: int) -> None:
        super().__init__(ErrorCode.ACTIVITY_NOT_FOUND, "Activity", "activity_id", activity_id)


class NewsNotFoundError(NotFoundError):
    """News item not found."""

    def __init__(self, news_id: int) -> None:
        super().__init__(ErrorCode.NEWS_NOT_FOUND, "News", "news_id", news_id)


class CommunityPostNotFoundError(NotFoundError):
    """Community post not found."""

    def __init__(self, post_id: int) -> None:
        super().__init__(ErrorCode.POST_NOT_FOUND, "Post", "post_id", post_id)


class CommentNotFoundError(NotFoundError):
    """Community comment not found."""

    def __init__(self, comment_id: int) -> None:
        super().__init__(ErrorCode.COMMENT_NOT_FOUND, "Comment", "comment_id", comment_id)


class VolunteerPostNotFoundError(NotFoundError):
    """Volunteer request not found."""

    def __init__(self, post_id: int) -> None:
        super().__init__(
            ErrorCode.VOLUNTEER_POST_NOT_FOUND, "Volunteer post", "post_id", post_id
        )


class ImageNotFoundError(NotFoundError):
    """Stored image not found."""

    def __init__(self, image_id: int) -> None:
        super().__init__(ErrorCode.IMAGE_NOT_FOUND, "Image", "image_id", image_id)


class InvalidPriorityError(AppException):
    """News priority outside the allowed set."""

    def __init__(self, priority: str, allowed: list[str]) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_PRIORITY,
            message=f"Priority must be one of: {', '.join(allowed)}",
            status_code=400,
            details={"priority": priority},
        )


class ActivityInactiveError(AppException):
    """Activity is no longer accepting participants."""

    def __init__(self, activity_id: int) -> None:
        super().__init__(
            error_code=ErrorCode.ACTIVITY_INACTIVE,
            message="Activity is not active",
            status_code=400,
            details={"activity_id": activity_id},
        )


class ActivityFullError(AppException):
    """Activity reached its capacity."""

    def __init__(self, activity_id: int) -> None:
        super().__init__(
            error_code=ErrorCode.ACTIVITY_FULL,
            message="Activity is full",
            status_code=400,
            details={"activity_id": activity_id},
        )


class AlreadyJoinedError(AppException):
    """User already joined the activity."""

    def __init__(self, activity_id: int) -> None:
        super().__init__(
            error_code=ErrorCode.ALREADY_JOINED,
            message="User already joined this activity",
            status_code=400,
            details={"activity_id": activity_id},
        )


class NotJoinedError(AppException):
    """User has not joined the activity."""

    def __init__(self, activity_id: int) -> None:
        super().__init__(
            error_code=ErrorCode.NOT_JOINED,
            message="User has not joined this activity",
            status_code=400,
            details={"activity_id": activity_id},
        )


class AlreadySupportedError(AppException):
    """User already supports the volunteer request."""

    def __init__(self, post_id: int) -> None:
        super().__init__(
            error_code=ErrorCode.ALREADY_SUPPORTED,
            message="You have already supported this request",
            status_code=400,
            details={"post_id": post_id, "supported": True},
        )


class NotSupportedError(AppException):
    """User does not support the volunteer request."""

    def __init__(self, post_id: int) -> None:
        super().__init__(
            error_code=ErrorCode.NOT_SUPPORTED,
            message="You have not supported this request",
            status_code=400,
            details={"post_id": post_id, "supported": False},
        )


class PayloadTooLargeError(AppException):
    """Uploaded file exceeds the size cap."""

    def __init__(self, size: int, max_size: int) -> None:
        super().__init__(
            error_code=ErrorCode.PAYLOAD_TOO_LARGE,
            message=f"File too large. Maximum size is {max_size // (1024 * 1024)}MB.",
            status_code=413,
            details={"size": size, "max_size": max_size},
        )


class UnsupportedMediaTypeError(AppException):
    """Uploaded file type is not on the allowlist."""

    def __init__(self, mime: str) -> None:
        super().__init__(
            error_code=ErrorCode.UNSUPPORTED_MEDIA_TYPE,
            message=(
                "Invalid file type. Only PNG, JPG, JPEG, WEBP, GIF, BMP, "
                "and SVG are allowed."
            ),
            status_code=415,
            details={"mime": mime},
        )


class DuplicateEntryError(AppException):
    """A unique constraint rejected an insert."""

    def __init__(self, entity: str) -> None:
        super().__init__(
            error_code=ErrorCode.DUPLICATE_ENTRY,
            message=f"Duplicate {entity}",
            status_code=409,
            details={"entity": entity},
        )
