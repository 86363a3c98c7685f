"""API router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from app.api.dependencies (no manual service construction).
"""

from fastapi import APIRouter

from app.api.endpoints import cache, content, debug, health, webhook

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(webhook.router, prefix="/webhook", tags=["webhook"])
api_router.include_router(cache.router, prefix="/cache", tags=["cache"])
api_router.include_router(debug.router, prefix="/debug", tags=["debug"])
api_router.include_router(content.router, prefix="/content/{locale}", tags=["content"])
