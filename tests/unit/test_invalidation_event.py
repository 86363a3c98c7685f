"""Tests for InvalidationEvent parsing of Strapi webhook bodies."""

import pytest

from app.domain.events import InvalidationEvent, normalize_model_name
from app.domain.exceptions import InvalidWebhookPayloadException


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("api::page.page", "page"),
        ("api::news-article.news-article", "news-article"),
        ("page", "page"),
        (" footer ", "footer"),
    ],
)
def test_normalize_model_name(raw: str, expected: str) -> None:
    assert normalize_model_name(raw) == expected


def test_from_payload_reads_entry_fields() -> None:
    event = InvalidationEvent.from_webhook_payload(
        {
            "event": "entry.publish",
            "model": "api::page.page",
            "entry": {"id": 3, "slug": "ordinace", "locale": "cs"},
        }
    )
    assert event == InvalidationEvent("page", slug="ordinace", locale="cs", event="entry.publish")


def test_from_payload_without_entry_widens_to_none() -> None:
    event = InvalidationEvent.from_webhook_payload({"model": "navigation", "entry": None})
    assert event.slug is None
    assert event.locale is None
    assert event.event is None


@pytest.mark.parametrize("payload", [[], "page", {"event": "entry.update"}, {"model": "  "}, {"model": 3}])
def test_from_payload_rejects_invalid_bodies(payload) -> None:
    with pytest.raises(InvalidWebhookPayloadException) as exc_info:
        InvalidationEvent.from_webhook_payload(payload)
    assert exc_info.value.error_code == "INVALID_PAYLOAD"
