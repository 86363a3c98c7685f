"""CMS change notifications translated into cache invalidation events."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from app.domain.exceptions import InvalidWebhookPayloadException


def normalize_model_name(model: str) -> str:
    """Reduce a Strapi 5 content-type UID to its model name.

    Strapi 5 sends "api::page.page"; older versions send "page". Anything
    that is not an api UID is returned stripped but otherwise unchanged.
    """
    model = model.strip()
    if "::" in model:
        parts = model.split("::")
        if len(parts) == 2:
            return parts[1].split(".")[0]
    return model


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


@dataclass(frozen=True, slots=True)
class InvalidationEvent:
    """A single content change: which type, and optionally which item and locale.

    Never persisted; lives for one dispatcher call.
    """

    content_type: str
    slug: str | None = None
    locale: str | None = None
    event: str | None = None

    @classmethod
    def from_webhook_payload(cls, payload: Any) -> InvalidationEvent:
        """Build an event from a Strapi webhook body {event, model, entry}.

        Raises:
            InvalidWebhookPayloadException: If payload is not an object or model is missing.
        """
        if not isinstance(payload, dict):
            raise InvalidWebhookPayloadException("Webhook body must be a JSON object")
        raw_model = payload.get("model")
        if not isinstance(raw_model, str) or not raw_model.strip():
            raise InvalidWebhookPayloadException("Webhook body is missing 'model'")
        entry = payload.get("entry")
        if not isinstance(entry, dict):
            entry = {}
        return cls(
            content_type=normalize_model_name(raw_model),
            slug=_optional_str(entry.get("slug")),
            locale=_optional_str(entry.get("locale")),
            event=_optional_str(payload.get("event")),
        )
