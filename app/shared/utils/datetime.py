"""UTC datetime utilities.

Timestamps in API responses are timezone-aware UTC and serialize as ISO 8601.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info (never naive)."""
    return datetime.now(UTC)
