"""
REST API routes.
"""

from __future__ import annotations

from fastapi import APIRouter

from api.comments import router as comments_router
from api.posts import router as posts_router
from api.users import router as users_router

router = APIRouter()
router.include_router(users_router)
router.include_router(posts_router)
router.include_router(comments_router)


@router.get("/health", tags=["health"])
async def health() -> dict:
    return {"status": "ok"}
