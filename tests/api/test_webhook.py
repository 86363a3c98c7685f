"""Tests for POST /api/webhook."""

import pytest
from httpx import AsyncClient

from app.core.constants import WEBHOOK_SIGNATURE_HEADER as SIGNATURE_HEADER

PAGE_EVENT = {
    "event": "entry.publish",
    "model": "api::page.page",
    "entry": {"id": 7, "slug": "ordinace", "locale": "cs"},
}


@pytest.mark.parametrize(
    "headers",
    [{}, {SIGNATURE_HEADER: "wrong"}, {SIGNATURE_HEADER: ""}],
    ids=["missing", "wrong", "empty"],
)
async def test_bad_signature_is_rejected_without_touching_cache(
    client: AsyncClient, memory_cache, headers: dict[str, str]
) -> None:
    memory_cache.data["page:cs:ordinace"] = {"title": "Ordinace"}

    response = await client.post("/api/webhook", json=PAGE_EVENT, headers=headers)

    assert response.status_code == 401
    assert response.json()["error"] == "Unauthorized"
    assert memory_cache.deleted_patterns == []
    assert "page:cs:ordinace" in memory_cache.data


async def test_secret_in_query_is_not_accepted(client: AsyncClient, memory_cache) -> None:
    response = await client.post("/api/webhook?secret=test-webhook-secret", json=PAGE_EVENT)
    assert response.status_code == 401
    assert memory_cache.deleted_patterns == []


async def test_unconfigured_secret_rejects_everything(
    client: AsyncClient, memory_cache, auth_headers, no_webhook_secret
) -> None:
    response = await client.post("/api/webhook", json=PAGE_EVENT, headers=auth_headers)
    assert response.status_code == 401
    assert memory_cache.deleted_patterns == []


async def test_auth_is_checked_before_body_parsing(client: AsyncClient) -> None:
    response = await client.post(
        "/api/webhook",
        content=b"{not json",
        headers={SIGNATURE_HEADER: "wrong", "Content-Type": "application/json"},
    )
    assert response.status_code == 401


async def test_invalid_json_is_400(client: AsyncClient, memory_cache, auth_headers) -> None:
    response = await client.post(
        "/api/webhook",
        content=b"{not json",
        headers={**auth_headers, "Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "INVALID_PAYLOAD"
    assert memory_cache.deleted_patterns == []


@pytest.mark.parametrize(
    "body",
    [{"event": "entry.update", "entry": {"slug": "x"}}, {"model": ""}, ["api::page.page"]],
    ids=["no-model", "empty-model", "not-an-object"],
)
async def test_payload_without_model_is_400(client: AsyncClient, memory_cache, auth_headers, body) -> None:
    response = await client.post("/api/webhook", json=body, headers=auth_headers)
    assert response.status_code == 400
    assert memory_cache.deleted_patterns == []


async def test_page_publish_invalidates_page_keys(client: AsyncClient, memory_cache, auth_headers) -> None:
    memory_cache.data.update(
        {
            "page:cs:ordinace": {"title": "Ordinace"},
            "page:cs:ordinace-2": {"title": "Other"},
            "page:en:ordinace": {"title": "Clinic"},
            "page:cs:ordinace/kardiologie": {"title": "Kardiologie"},
            "page-hierarchy:cs:ordinace/kardiologie": [],
            "page-slugs:cs": ["ordinace"],
            "search-index:cs": [],
            "footer:cs": {},
        }
    )

    response = await client.post("/api/webhook", json=PAGE_EVENT, headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {
        "received": True,
        "processed": {"event": "entry.publish", "model": "page", "slug": "ordinace", "locale": "cs"},
    }
    assert sorted(memory_cache.data) == ["footer:cs", "page:cs:ordinace-2", "page:en:ordinace"]


async def test_event_without_slug_or_locale_widens(client: AsyncClient, memory_cache, auth_headers) -> None:
    memory_cache.data.update({"nav:cs:navbar-any:footer-any": [], "nav:en:navbar-1:footer-any": []})

    response = await client.post("/api/webhook", json={"model": "navigation"}, headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["processed"]["locale"] is None
    assert memory_cache.deleted_patterns == ["nav:*:*"]
    assert memory_cache.data == {}


async def test_nothing_to_delete_is_still_200(client: AsyncClient, memory_cache, auth_headers) -> None:
    response = await client.post(
        "/api/webhook",
        json={"event": "entry.delete", "model": "api::footer.footer", "entry": {"locale": "en"}},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert memory_cache.deleted_patterns == ["footer:en"]


async def test_cache_down_is_still_200(client: AsyncClient, memory_cache, auth_headers) -> None:
    memory_cache.available = False
    response = await client.post("/api/webhook", json=PAGE_EVENT, headers=auth_headers)
    assert response.status_code == 200


async def test_bulk_publish_burst_is_never_rate_limited(client: AsyncClient, auth_headers) -> None:
    statuses = set()
    for i in range(320):
        body = {"event": "entry.publish", "model": "api::page.page", "entry": {"slug": f"p{i}", "locale": "cs"}}
        response = await client.post("/api/webhook", json=body, headers=auth_headers)
        statuses.add(response.status_code)
    assert statuses == {200}
