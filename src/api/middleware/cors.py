"""CORS headers middleware.

Starlette's CORSMiddleware only answers requests that carry an ``Origin``
header. Mobile clients and the web app expect the same fixed set of headers
on every response, so this middleware adds them unconditionally and answers
any ``OPTIONS`` request itself with an empty 204.
"""

from typing import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from core.config import settings


def cors_headers() -> dict[str, str]:
    """The CORS headers attached to every response."""
    return {
        "Access-Control-Allow-Origin": settings.cors_allow_origin,
        "Access-Control-Allow-Methods": settings.cors_allow_methods,
        "Access-Control-Allow-Headers": settings.cors_allow_headers,
        "Access-Control-Allow-Credentials": str(settings.cors_allow_credentials).lower(),
        "Access-Control-Max-Age": str(settings.cors_max_age),
    }


def add_cors_headers(response: Response) -> Response:
    """Attach the CORS headers to ``response`` and return it."""
    response.headers.update(cors_headers())
    return response


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Attach CORS headers to all responses and short-circuit preflights."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if request.method == "OPTIONS":
            return add_cors_headers(Response(status_code=204))

        response = await call_next(request)
        return add_cors_headers(response)
