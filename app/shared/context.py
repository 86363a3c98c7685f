"""Request context management using contextvars.

Holds the request ID for the current request so log records emitted deep in
the cache or CMS layers can be tied to the HTTP request (or webhook) that
caused them. Background cache writes copy the context at creation, so they
log under the request that scheduled them.
"""

from contextvars import ContextVar, Token

_current_request_id: ContextVar[str | None] = ContextVar("current_request_id", default=None)


def set_request_id(request_id: str | None) -> Token:
    """Bind request_id to the current context; returns a token for reset."""
    return _current_request_id.set(request_id)


def reset_request_id(token: Token) -> None:
    _current_request_id.reset(token)


def get_request_id() -> str | None:
    """Return the request ID bound to the current context, or None outside a request."""
    return _current_request_id.get()
