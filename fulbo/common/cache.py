"""Small result caches keyed by external id.

``ResultCache`` is the interface the services depend on; ``TTLCache`` keeps
entries in process memory and ``RedisCache`` shares them through Redis.
Both expire entries after a fixed time-to-live.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Hashable, Optional, Protocol

from pydantic import BaseModel

logger = logging.getLogger(__name__)

DEFAULT_LOCK_STRIPES = 64


class ResultCache(Protocol):
    def get(self, key: Hashable) -> tuple[Any, bool]: ...

    def put(self, key: Hashable, value: Any) -> None: ...


class TTLCache:
    """In-memory cache with a fixed TTL and striped locks.

    Keys hash onto a fixed set of locks, so lookup and population of the
    same key serialize while most different keys never wait on each other.
    Expired entries are swept at most once per TTL on writes.
    """

    def __init__(
        self,
        ttl_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        stripes: int = DEFAULT_LOCK_STRIPES,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[Hashable, tuple[float, Any]] = {}
        self._locks = [threading.Lock() for _ in range(max(1, stripes))]
        self._sweep_guard = threading.Lock()
        self._last_sweep = clock()

    def _lock_for(self, key: Hashable) -> threading.Lock:
        return self._locks[hash(key) % len(self._locks)]

    def _expired(self, stored_at: float, now: float) -> bool:
        return now - stored_at >= self.ttl_seconds

    def _lookup(self, key: Hashable) -> tuple[Any, bool]:
        entry = self._entries.get(key)
        if entry is None:
            return None, False
        stored_at, value = entry
        if self._expired(stored_at, self._clock()):
            self._entries.pop(key, None)
            return None, False
        return value, True

    def _store(self, key: Hashable, value: Any) -> None:
        now = self._clock()
        self._entries[key] = (now, value)
        self._sweep(now)

    def _sweep(self, now: float) -> None:
        if not self._expired(self._last_sweep, now) or not self._sweep_guard.acquire(blocking=False):
            return
        try:
            self._last_sweep = now
            for key, entry in list(self._entries.items()):
                # an entry replaced meanwhile is a different tuple and survives
                if self._expired(entry[0], now) and self._entries.get(key) is entry:
                    self._entries.pop(key, None)
        finally:
            self._sweep_guard.release()

    def get(self, key: Hashable) -> tuple[Any, bool]:
        with self._lock_for(key):
            return self._lookup(key)

    def put(self, key: Hashable, value: Any) -> None:
        with self._lock_for(key):
            self._store(key, value)

    def get_or_load(self, key: Hashable, loader: Callable[[], Any]) -> Any:
        """Return the cached value or call ``loader`` once and cache its result.

        Exceptions from ``loader`` propagate and leave the cache untouched.
        """
        with self._lock_for(key):
            value, found = self._lookup(key)
            if found:
                return value
            value = loader()
            self._store(key, value)
            return value

    def __len__(self) -> int:
        return len(self._entries)


class RedisCache:
    """Redis backed cache; values are pydantic models stored as JSON with SETEX."""

    def __init__(self, client: Any, ttl_seconds: int, *, model: type[BaseModel], prefix: str = "fulbo"):
        self.client = client
        self.ttl_seconds = int(ttl_seconds)
        self.model = model
        self.prefix = prefix

    @classmethod
    def from_url(cls, url: str, ttl_seconds: int, *, model: type[BaseModel], prefix: str = "fulbo") -> "RedisCache":
        import redis

        return cls(redis.Redis.from_url(url), ttl_seconds, model=model, prefix=prefix)

    def _key(self, key: Hashable) -> str:
        return f"{self.prefix}:{key}"

    def get(self, key: Hashable) -> tuple[Any, bool]:
        raw: Optional[bytes] = self.client.get(self._key(key))
        if raw is None:
            return None, False
        return self.model.model_validate_json(raw), True

    def put(self, key: Hashable, value: Any) -> None:
        self.client.setex(self._key(key), self.ttl_seconds, value.model_dump_json(by_alias=True))


__all__ = ["ResultCache", "TTLCache", "RedisCache"]
