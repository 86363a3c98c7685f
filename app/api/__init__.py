"""HTTP API: webhook, cache administration, diagnostics and content routes."""

from app.api.router import api_router

__all__ = ["api_router"]
