"""Tests for cache key builders and glob escaping."""

import pytest

from app.infrastructure.cache.keys import (
    escape_pattern,
    footer_key,
    icons_key,
    intranet_news_list_key,
    navigation_key,
    news_list_key,
    page_hierarchy_key,
    page_key,
)


def test_page_key_shape() -> None:
    assert page_key("cs", "ordinace") == "page:cs:ordinace"


def test_nested_slug_keeps_slashes() -> None:
    assert page_hierarchy_key("cs", "sluzby/kardiologie") == "page-hierarchy:cs:sluzby/kardiologie"


@pytest.mark.parametrize("slug", ["", "a:b"])
def test_invalid_components_rejected(slug: str) -> None:
    with pytest.raises(ValueError):
        page_key("cs", slug)


def test_navigation_key_encodes_filters() -> None:
    assert navigation_key("en") == "nav:en:navbar-any:footer-any"
    assert navigation_key("cs", navbar=True, footer=False) == "nav:cs:navbar-1:footer-0"


def test_news_list_key_is_order_independent_for_tags() -> None:
    a = news_list_key("cs", ["b", "a"], 5, "date:desc")
    b = news_list_key("cs", ["a", "b", "a"], 5, "date:desc")
    assert a == b == "news-list:cs:a,b:5:date.desc"


def test_news_list_key_defaults() -> None:
    assert news_list_key("cs") == "news-list:cs:all:all:date.desc"


def test_unlocalized_and_simple_keys() -> None:
    assert icons_key() == "icons"
    assert footer_key("en") == "footer:en"
    assert intranet_news_list_key("cs", 3) == "intranet-news-list:cs:3"


def test_escape_pattern_escapes_glob_metacharacters() -> None:
    assert escape_pattern("a*b?c[d]") == "a\\*b\\?c\\[d\\]"
    assert escape_pattern("plain-slug") == "plain-slug"
