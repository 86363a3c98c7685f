"""Content API schemas.

Pages, footers and articles are passed through as Strapi returns them (dynamic
zones are open-ended); only the shapes this service derives are modelled.
"""

from pydantic import BaseModel, Field


class NavigationItem(BaseModel):
    """Resolved navigation entry."""

    name: str
    href: str
    target: str = Field("_self", description="_self or _blank")


class BreadcrumbItem(BaseModel):
    label: str
    href: str


class SearchIndexEntry(BaseModel):
    """One searchable page or news article."""

    title: str
    href: str
    kind: str = Field(..., description="page or news")
