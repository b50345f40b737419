"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.activity import router as activity_router
from api.v1.routes.community import router as community_router
from api.v1.routes.images import router as images_router
from api.v1.routes.news import router as news_router
from api.v1.routes.profiles import router as profiles_router
from api.v1.routes.volunteer import router as volunteer_router

router = APIRouter()
router.include_router(activity_router)
router.include_router(news_router)
router.include_router(community_router)
router.include_router(volunteer_router)
router.include_router(profiles_router)
router.include_router(images_router)
