"""Tests for the cached content routes under /api/content/{locale}."""

import copy

from httpx import AsyncClient

from app.core.constants import CACHE_MISS_MARKER, NEGATIVE_TTL_SECONDS
from app.domain.exceptions import CmsUnavailableException

ORDINACE = {"id": 3, "slug": "ordinace", "title": "Ordinace", "content": []}


async def test_unsupported_locale_is_404(client: AsyncClient, cms) -> None:
    response = await client.get("/api/content/de/pages/ordinace")
    assert response.status_code == 404
    assert response.json()["details"]["resource_type"] == "locale"
    cms.fetch_page_by_slug.assert_not_awaited()


async def test_locale_is_case_insensitive(client: AsyncClient, cms) -> None:
    cms.fetch_page_by_slug.return_value = ORDINACE
    response = await client.get("/api/content/CS/pages/ordinace")
    assert response.status_code == 200
    cms.fetch_page_by_slug.assert_awaited_once_with("ordinace", "cs")


async def test_page_is_served_from_cache_on_second_request(client: AsyncClient, services, cms, memory_cache) -> None:
    cms.fetch_page_by_slug.return_value = ORDINACE

    first = await client.get("/api/content/cs/pages/ordinace")
    await services.drain()
    second = await client.get("/api/content/cs/pages/ordinace")

    assert first.json() == second.json() == ORDINACE
    cms.fetch_page_by_slug.assert_awaited_once()
    assert memory_cache.data["page:cs:ordinace"] == ORDINACE


async def test_nested_slug(client: AsyncClient, cms) -> None:
    cms.fetch_page_by_slug.return_value = {"slug": "sluzby/ekg"}
    response = await client.get("/api/content/cs/pages/sluzby/ekg/")
    assert response.status_code == 200
    cms.fetch_page_by_slug.assert_awaited_once_with("sluzby/ekg", "cs")


async def test_missing_page_is_404_and_negatively_cached(client: AsyncClient, services, cms, memory_cache) -> None:
    response = await client.get("/api/content/cs/pages/nope")
    await services.drain()

    assert response.status_code == 404
    assert memory_cache.data["page:cs:nope"] == CACHE_MISS_MARKER
    assert memory_cache.ttls["page:cs:nope"] == NEGATIVE_TTL_SECONDS

    assert (await client.get("/api/content/cs/pages/nope")).status_code == 404
    cms.fetch_page_by_slug.assert_awaited_once()


async def test_slug_with_separator_is_404(client: AsyncClient, cms) -> None:
    response = await client.get("/api/content/cs/pages/a:b")
    assert response.status_code == 404
    cms.fetch_page_by_slug.assert_not_awaited()


async def test_cms_outage_is_502(client: AsyncClient, cms, memory_cache) -> None:
    cms.fetch_footer.side_effect = CmsUnavailableException("Strapi request failed", status_code=503)

    response = await client.get("/api/content/cs/footer")

    assert response.status_code == 502
    assert response.json()["error"] == "CMS_UNAVAILABLE"
    assert memory_cache.data == {}


async def test_navigation_filter(client: AsyncClient, cms) -> None:
    cms.fetch_navigation.return_value = [
        {"title": "Kontakt", "footer": True, "link": {"url": "/kontakt"}},
        {"title": "Ordinace", "navbar": True, "link": {"page": {"slug": "ordinace"}}},
    ]

    response = await client.get("/api/content/en/navigation", params={"footer": "true"})

    assert response.status_code == 200
    assert response.json() == [{"name": "Kontakt", "href": "/kontakt", "target": "_self"}]


async def test_news_query_is_passed_through(client: AsyncClient, services, cms, memory_cache) -> None:
    cms.fetch_news_articles.return_value = [{"slug": "novy-lekar"}]

    response = await client.get(
        "/api/content/cs/news", params=[("tags", "lekari"), ("tags", "akce"), ("limit", "3"), ("sort", "date:asc")]
    )
    await services.drain()

    assert response.status_code == 200
    cms.fetch_news_articles.assert_awaited_once_with("cs", tags=["lekari", "akce"], limit=3, sort="date:asc")
    assert "news-list:cs:akce,lekari:3:date.asc" in memory_cache.data


async def test_news_rejects_bad_query(client: AsyncClient) -> None:
    assert (await client.get("/api/content/cs/news", params={"limit": "0"})).status_code == 422
    assert (await client.get("/api/content/cs/news", params={"sort": "date"})).status_code == 422


async def test_news_article_404(client: AsyncClient) -> None:
    response = await client.get("/api/content/cs/news/nope")
    assert response.status_code == 404
    assert response.json()["details"]["resource_type"] == "news-article"


async def test_breadcrumbs(client: AsyncClient, cms) -> None:
    cms.fetch_page_by_slug.return_value = {
        "slug": "sluzby/ekg",
        "title": "EKG",
        "parent": {"slug": "sluzby", "title": "Služby"},
    }

    response = await client.get("/api/content/cs/breadcrumbs/sluzby/ekg")

    assert response.status_code == 200
    assert [item["label"] for item in response.json()] == ["Úvod", "Služby", "EKG"]


async def test_search_index_and_icons(client: AsyncClient, cms) -> None:
    cms.fetch_all_pages.return_value = [{"slug": "ordinace", "title": "Ordinace"}]
    cms.fetch_icons.return_value = [{"id": 1}]

    index = await client.get("/api/content/cs/search-index")
    icons = await client.get("/api/content/en/icons")

    assert index.json() == [{"title": "Ordinace", "href": "/cs/ordinace/", "kind": "page"}]
    assert icons.json() == [{"id": 1}]


async def test_webhook_forces_refetch(client: AsyncClient, services, cms, auth_headers) -> None:
    cms.fetch_page_by_slug.return_value = ORDINACE
    await client.get("/api/content/cs/pages/ordinace")
    await services.drain()

    updated = {**ORDINACE, "title": "Ordinace (nová)"}
    cms.fetch_page_by_slug.return_value = updated
    hook = await client.post(
        "/api/webhook",
        json={"event": "entry.update", "model": "api::page.page", "entry": {"slug": "ordinace", "locale": "cs"}},
        headers=auth_headers,
    )
    response = await client.get("/api/content/cs/pages/ordinace")

    assert hook.status_code == 200
    assert response.json() == updated
    assert cms.fetch_page_by_slug.await_count == 2


async def test_parent_rename_refreshes_child_breadcrumbs(client: AsyncClient, services, cms, auth_headers) -> None:
    pages = {
        "sluzby": {"slug": "sluzby", "title": "Služby"},
        "sluzby/ekg": {"slug": "sluzby/ekg", "title": "EKG", "parent": {"slug": "sluzby", "title": "Služby"}},
    }
    cms.fetch_page_by_slug.side_effect = lambda slug, locale: copy.deepcopy(pages.get(slug))

    first = await client.get("/api/content/cs/breadcrumbs/sluzby/ekg")
    await services.drain()

    pages["sluzby"]["title"] = "Služby a péče"
    pages["sluzby/ekg"]["parent"]["title"] = "Služby a péče"
    hook = await client.post(
        "/api/webhook",
        json={"event": "entry.update", "model": "api::page.page", "entry": {"slug": "sluzby", "locale": "cs"}},
        headers=auth_headers,
    )
    second = await client.get("/api/content/cs/breadcrumbs/sluzby/ekg")

    assert [item["label"] for item in first.json()] == ["Úvod", "Služby", "EKG"]
    assert hook.status_code == 200
    assert [item["label"] for item in second.json()] == ["Úvod", "Služby a péče", "EKG"]
