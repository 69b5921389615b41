"""Main API router."""

from fastapi import APIRouter

from src.api.auth import router as auth_router
from src.api.channels import router as channels_router
from src.api.comments import router as comments_router
from src.api.videos import router as videos_router

api_router = APIRouter(prefix="/api")

api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(channels_router, prefix="/channels", tags=["channels"])
api_router.include_router(videos_router, prefix="/videos", tags=["videos"])
api_router.include_router(comments_router, prefix="/comments", tags=["comments"])
