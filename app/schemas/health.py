"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")


class ReadinessResponse(BaseModel):
    """Response for GET /health/ready. A missing cache is reported, not failed."""

    status: str = Field(default="ok", description="Readiness status")
    cache_available: bool = Field(..., description="Whether Redis answered a PING")
    version: str = Field(..., description="Application version")
