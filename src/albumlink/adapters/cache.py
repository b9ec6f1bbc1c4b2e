"""In-process read-through cache with named TTL tiers."""

from __future__ import annotations

import time
from collections import OrderedDict
from logging import getLogger
from typing import TYPE_CHECKING, Any, TypeVar, cast

from albumlink.config.cache import CacheTTLConfig

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from albumlink.config.cache import TTLTier

log = getLogger(__name__)

T = TypeVar("T")


class InMemoryTTLCache:
    """LRU-bounded mapping of cache keys to ``(value, expires_at)``.

    Producer failures propagate to the caller and leave nothing behind, so a
    transient error is retried on the next lookup instead of being cached.
    """

    def __init__(
        self,
        config: CacheTTLConfig | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config or CacheTTLConfig()
        self._clock = clock
        self._entries: OrderedDict[str, tuple[Any, float]] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return self._lookup(key) is not _MISSING

    async def cached(
        self,
        key: str,
        producer: Callable[[], Awaitable[T]],
        ttl_tier: TTLTier,
    ) -> T:
        found = self._lookup(key)
        if found is not _MISSING:
            self.hits += 1
            log.debug("Cache hit for %s", key)
            return cast("T", found)

        self.misses += 1
        log.debug("Cache miss for %s", key)
        value = await producer()
        self.set(key, value, ttl_tier)
        return value

    def set(self, key: str, value: object, ttl_tier: TTLTier) -> None:
        expires_at = self._clock() + self._config.seconds_for(ttl_tier)
        self._entries[key] = (value, expires_at)
        self._entries.move_to_end(key)
        self._enforce_size_limit()

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)

    def invalidate_prefix(self, prefix: str) -> int:
        stale = [key for key in self._entries if key.startswith(prefix)]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def cleanup_expired(self) -> int:
        now = self._clock()
        expired = [key for key, (_, expires_at) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]
        if expired:
            log.debug("Removed %d expired cache entries", len(expired))
        return len(expired)

    def _lookup(self, key: str) -> object:
        entry = self._entries.get(key)
        if entry is None:
            return _MISSING
        value, expires_at = entry
        if expires_at <= self._clock():
            del self._entries[key]
            return _MISSING
        self._entries.move_to_end(key)
        return value

    def _enforce_size_limit(self) -> None:
        overflow = len(self._entries) - self._config.max_entries
        for _ in range(max(overflow, 0)):
            evicted, _ = self._entries.popitem(last=False)
            log.debug("Evicted %s from cache", evicted)


class _Missing:
    def __repr__(self) -> str:
        return "<missing>"


_MISSING = _Missing()
