"""Application DTOs."""

from app.application.dtos.cache import CacheStats, InvalidationResult

__all__ = [
    "CacheStats",
    "InvalidationResult",
]
