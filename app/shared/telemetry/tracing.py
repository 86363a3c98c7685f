"""Span helpers for Strapi calls and cache invalidation."""

import inspect
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

T = TypeVar("T")

_tracer = trace.get_tracer("app")

# Only these argument names become span attributes; secrets and payloads never do.
_RECORDED_ARGS = frozenset({"slug", "locale", "content_type", "tags", "limit", "sort", "pattern"})


def _argument_attributes(signature: inspect.Signature, args: tuple, kwargs: dict) -> dict[str, str]:
    try:
        bound = signature.bind_partial(*args, **kwargs)
    except TypeError:
        return {}
    return {
        f"content.{name}": str(value)
        for name, value in bound.arguments.items()
        if name in _RECORDED_ARGS and value is not None
    }


def traced(span_name: str) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Run an async function inside a span named span_name.

    Arguments named slug, locale, tags and the like are recorded whether they
    were passed positionally or by keyword. Exceptions mark the span as failed
    and are re-raised.
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        signature = inspect.signature(func)

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            with _tracer.start_as_current_span(
                span_name, attributes=_argument_attributes(signature, args, kwargs)
            ) as span:
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    span.set_status(Status(StatusCode.ERROR, str(e)))
                    span.record_exception(e)
                    raise

        return wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Add attributes to the current span, if one is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        for key, value in attributes.items():
            span.set_attribute(key, value)
