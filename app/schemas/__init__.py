"""Pydantic request/response schemas for the API."""

from app.schemas.cache import CacheClearResponse, CacheStatsResponse
from app.schemas.content import BreadcrumbItem, NavigationItem, SearchIndexEntry
from app.schemas.health import HealthResponse, ReadinessResponse
from app.schemas.webhook import WebhookProcessed, WebhookResponse

__all__ = [
    "BreadcrumbItem",
    "CacheClearResponse",
    "CacheStatsResponse",
    "HealthResponse",
    "NavigationItem",
    "ReadinessResponse",
    "SearchIndexEntry",
    "WebhookProcessed",
    "WebhookResponse",
]
