"""Main FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.exception_handlers import setup_exception_handlers
from api.middleware.cors import CORSHeadersMiddleware
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.middleware.security import SecurityHeadersMiddleware
from api.routes.health import router as health_router
from api.v1 import router as v1_router
from core.config import settings
from core.logging import setup_logging
from core.rate_limit import limiter, rate_limit_exceeded_handler
from infrastructure.database.session import Database

logger = structlog.get_logger()

# Initialize structured logging
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the database on startup (unless one was injected) and close it on shutdown."""
    owns_database = getattr(app.state, "database", None) is None
    if owns_database:
        app.state.database = Database(settings.async_database_url, echo=settings.debug)
    logger.info("application_started", environment=settings.app_env)

    yield

    if owns_database:
        await app.state.database.dispose()
    logger.info("application_stopped")


def create_app(database: Database | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Pass ``database`` to run against an existing handle (tests, scripts); the
    caller then owns its lifecycle.
    """
    app = FastAPI(
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=(
            "## Community Hub API\n\n"
            "Backend for a neighbourhood community app: activities, news, "
            "a community board, volunteer requests, profiles and images.\n\n"
            "### Authentication\n"
            "Write endpoints require a bearer token in the Authorization header:\n"
            "```\nAuthorization: Bearer <token>\n```\n"
            "The token is a user id or `jwt_token_<user_id>_<timestamp>`. It is "
            "not signed: this is a placeholder for a real identity provider.\n\n"
            "### Rate Limits\n"
            "- GET endpoints: 30 requests/minute\n"
            "- POST/PUT/DELETE: 10 requests/minute"
        ),
        version=settings.app_version,
        debug=settings.debug,
        openapi_tags=[
            {"name": "health", "description": "Health check endpoints"},
            {"name": "activities", "description": "Community activities and participation"},
            {"name": "news", "description": "News and announcements"},
            {"name": "community", "description": "Community posts, comments and likes"},
            {"name": "volunteer", "description": "Volunteer requests and supports"},
            {"name": "profiles", "description": "User profiles"},
            {"name": "images", "description": "Image upload and serving"},
        ],
    )
    app.state.database = database

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # Security & tracking middleware (LIFO order - last added = outermost)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # GZip compression for responses > 1KB
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # CORS headers on every response, preflights answered directly
    app.add_middleware(CORSHeadersMiddleware)

    # Setup exception handlers
    setup_exception_handlers(app)

    # Include routers
    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
