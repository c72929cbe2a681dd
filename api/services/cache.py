"""Small TTL cache with stale reads."""

import time
from collections.abc import Callable
from typing import Any


class TTLCache:
    """In-memory key/value cache where entries go stale after ``ttl`` seconds.

    Stale entries are never dropped, only hidden from ``get``. ``get_stale``
    still returns them so a caller can fall back to the last good value when
    a refresh fails.

    Usage::

        cache = TTLCache(ttl=300)
        cache.set("sections:123", sections)
        hit = cache.get("sections:123")  # value, or None if expired/missing
    """

    def __init__(
        self, ttl: float = 300, clock: Callable[[], float] = time.monotonic
    ) -> None:
        self._ttl = ttl
        self._clock = clock
        self._store: dict[str, tuple[Any, float]] = {}

    def get(self, key: str) -> Any | None:
        """Return the value if present and fresh, else None."""
        entry = self._store.get(key)
        if entry is None:
            return None
        value, stored_at = entry
        if self._clock() - stored_at > self._ttl:
            return None
        return value

    def get_stale(self, key: str) -> Any | None:
        """Return the value regardless of age, or None if never set."""
        entry = self._store.get(key)
        return entry[0] if entry is not None else None

    def set(self, key: str, value: Any) -> None:
        self._store[key] = (value, self._clock())

    def clear(self) -> None:
        self._store.clear()
