"""Strapi webhook API schemas."""

from pydantic import BaseModel, Field


class WebhookProcessed(BaseModel):
    """What the webhook understood from the payload."""

    event: str | None = Field(None, description="Strapi event, e.g. entry.publish")
    model: str = Field(..., description="Normalized content type, e.g. page")
    slug: str | None = None
    locale: str | None = None


class WebhookResponse(BaseModel):
    """Response for POST /webhook. Returned even when no keys were deleted."""

    received: bool = True
    processed: WebhookProcessed
