"""In-memory LRU cache with TTL expiration.

Process-level cache for normalized upstream responses (weather, places,
routes). One instance per endpoint family, created at application startup
and handed to the service that owns it.

Staleness is checked on read only. A stale entry stays in memory until it is
overwritten or pushed out by the size bound.
"""

import time
from collections import OrderedDict
from typing import Any, Callable


class LRUCache:
    """TTL-aware LRU cache for normalized response payloads."""

    def __init__(
        self,
        max_size: int = 1000,
        ttl_seconds: float = 600,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self._cache: OrderedDict[str, tuple[float, Any]] = OrderedDict()
        self._max_size = max_size
        self._ttl = ttl_seconds
        self._clock = clock

    def get(self, key: str) -> Any | None:
        if key not in self._cache:
            return None
        stored_at, value = self._cache[key]
        if self._clock() - stored_at >= self._ttl:
            return None
        self._cache.move_to_end(key)
        return value

    def set(self, key: str, value: Any) -> None:
        if key in self._cache:
            self._cache.move_to_end(key)
        self._cache[key] = (self._clock(), value)
        if len(self._cache) > self._max_size:
            self._cache.popitem(last=False)

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, key: str) -> bool:
        return key in self._cache


def build_cache_key(prefix: str, *parts: object) -> str:
    """Build a normalized cache key.

    Each part is stringified, trimmed and lower-cased so that requests that
    differ only in case or surrounding whitespace share an entry. Separators
    inside a part are escaped, so distinct part tuples never share a key.

    Example:
        >>> build_cache_key("current", " Paris ")
        'current:paris'
        >>> build_cache_key("route", "a:b", "c")
        'route:a\\\\:b:c'
    """
    normalized = [_escape(str(part).strip().lower()) for part in parts]
    return ":".join([prefix, *normalized])


def _escape(part: str) -> str:
    return part.replace("\\", "\\\\").replace(":", "\\:")
