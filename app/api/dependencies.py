"""Presentation-layer dependency injection (composition root).

Services are built once in app.core.lifespan and stored on app.state; routes
receive them through Depends() and never construct infrastructure directly.
Tests swap them with app.dependency_overrides.

The secret guards run as dependencies, so they complete before the endpoint
reads the request body or touches the cache.
"""

from __future__ import annotations

import hmac
import logging
from typing import Annotated

from fastapi import Depends, Path, Query, Request

from app.application.interfaces.services import ICacheService, ICmsClient
from app.application.services.cache_invalidation import CacheInvalidationService
from app.application.services.content_service import ContentService
from app.core.config import get_settings
from app.core.constants import WEBHOOK_SIGNATURE_HEADER
from app.domain.exceptions import AuthenticationException, ResourceNotFoundException

logger = logging.getLogger(__name__)


def get_cache(request: Request) -> ICacheService:
    return request.app.state.cache


def get_invalidation_service(request: Request) -> CacheInvalidationService:
    return request.app.state.invalidation


def get_cms_client(request: Request) -> ICmsClient:
    return request.app.state.cms


def get_content_service(request: Request) -> ContentService:
    return request.app.state.content


def _secret_matches(candidates: list[str | None], route: str) -> bool:
    """Return True if any candidate equals the configured secret (constant time).

    An unset secret rejects everything.
    """
    secret = get_settings().strapi_webhook_secret
    if secret is None or not secret.get_secret_value():
        logger.warning("%s rejected: STRAPI_WEBHOOK_SECRET is not configured", route)
        return False
    expected = secret.get_secret_value().encode()
    for candidate in candidates:
        if candidate and hmac.compare_digest(candidate.encode(), expected):
            return True
    logger.warning("%s rejected: secret mismatch or missing", route)
    return False


def require_webhook_signature(request: Request) -> None:
    """Accept only requests carrying the shared secret in the signature header.

    Raises:
        AuthenticationException: 401 before any body parsing.
    """
    if not _secret_matches([request.headers.get(WEBHOOK_SIGNATURE_HEADER)], request.url.path):
        raise AuthenticationException()


def require_admin_secret(
    request: Request,
    secret: Annotated[str | None, Query(description="Shared secret (GET only)")] = None,
) -> None:
    """Accept the shared secret from the signature header or the ?secret= parameter.

    Raises:
        AuthenticationException: 401 when neither matches.
    """
    candidates = [request.headers.get(WEBHOOK_SIGNATURE_HEADER), secret]
    if not _secret_matches(candidates, request.url.path):
        raise AuthenticationException()


def supported_locale(locale: Annotated[str, Path(description="Content locale, e.g. cs")]) -> str:
    """Validate the locale path segment against SUPPORTED_LOCALES.

    Raises:
        ResourceNotFoundException: 404 for any other locale.
    """
    normalized = locale.lower()
    if normalized not in get_settings().locales:
        raise ResourceNotFoundException("locale", locale)
    return normalized


CacheDep = Annotated[ICacheService, Depends(get_cache)]
InvalidationDep = Annotated[CacheInvalidationService, Depends(get_invalidation_service)]
CmsDep = Annotated[ICmsClient, Depends(get_cms_client)]
ContentDep = Annotated[ContentService, Depends(get_content_service)]
LocaleDep = Annotated[str, Depends(supported_locale)]
