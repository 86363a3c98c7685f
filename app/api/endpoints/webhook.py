"""Strapi webhook receiver: turns content changes into cache invalidation."""

import logging

from fastapi import APIRouter, Depends, Request

from app.api.dependencies import InvalidationDep, require_webhook_signature
from app.domain.events import InvalidationEvent
from app.domain.exceptions import InvalidWebhookPayloadException
from app.schemas.webhook import WebhookProcessed, WebhookResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=WebhookResponse,
    dependencies=[Depends(require_webhook_signature)],
    responses={400: {"description": "Body is not JSON or lacks model"}, 401: {"description": "Bad secret"}},
)
async def receive_webhook(request: Request, invalidation: InvalidationDep) -> WebhookResponse:
    """Invalidate cached content for a Strapi entry event.

    Configure in Strapi with header X-Strapi-Webhook-Signature set to
    STRAPI_WEBHOOK_SECRET. Responds 200 whether or not any keys existed;
    a failed pattern delete is logged, not reported to Strapi.
    """
    try:
        payload = await request.json()
    except ValueError as e:
        raise InvalidWebhookPayloadException("Request body is not valid JSON") from e
    event = InvalidationEvent.from_webhook_payload(payload)
    logger.info(
        "Webhook: %s on %s slug=%s locale=%s",
        event.event,
        event.content_type,
        event.slug,
        event.locale,
    )
    await invalidation.handle(event)
    return WebhookResponse(
        processed=WebhookProcessed(
            event=event.event,
            model=event.content_type,
            slug=event.slug,
            locale=event.locale,
        )
    )
