"""CMS: Strapi REST client and query encoding."""

from app.infrastructure.cms.strapi_client import StrapiClient, build_query_params

__all__ = [
    "StrapiClient",
    "build_query_params",
]
