"""Application layer: interfaces, DTOs and services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (cache, CMS client).
"""

from app.application.interfaces import ICacheService, ICmsClient
from app.application.services.cache_invalidation import CacheInvalidationService
from app.application.services.content_cache import ContentCache
from app.application.services.content_service import ContentService

__all__ = [
    "CacheInvalidationService",
    "ContentCache",
    "ContentService",
    "ICacheService",
    "ICmsClient",
]
