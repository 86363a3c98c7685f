"""Cache DTOs: namespace stats and invalidation results."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class CacheStats:
    """Introspection snapshot of the cache namespace (keys without prefix)."""

    available: bool
    key_count: int = 0
    keys: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the wire shape {available, keyCount, keys}."""
        return {"available": self.available, "keyCount": self.key_count, "keys": self.keys}


@dataclass(kw_only=True)
class InvalidationResult:
    """Outcome of one dispatcher call: patterns tried and keys removed."""

    content_type: str
    patterns: list[str] = field(default_factory=list)
    deleted: int = 0
    failed_patterns: list[str] = field(default_factory=list)
