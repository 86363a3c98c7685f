"""Cache administration API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CacheClearResponse(BaseModel):
    """Response for /cache/clear."""

    success: bool
    message: str
    timestamp: datetime


class CacheStatsResponse(BaseModel):
    """Response for GET /debug/cache (keys without the namespace prefix)."""

    model_config = ConfigDict(populate_by_name=True)

    available: bool
    key_count: int = Field(0, alias="keyCount")
    keys: list[str] = Field(default_factory=list)
