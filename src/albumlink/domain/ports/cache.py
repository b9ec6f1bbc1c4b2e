"""Port for the read-through cache wrapped around catalog lookups."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from albumlink.config.cache import TTLTier


T = TypeVar("T")


@runtime_checkable
class ReadThroughCache(Protocol):
    async def cached(
        self,
        key: str,
        producer: Callable[[], Awaitable[T]],
        ttl_tier: TTLTier,
    ) -> T:
        """Return the value stored under ``key`` or produce, store and return it."""
        ...


def musicbrainz_release_group_key(release_group_id: str) -> str:
    return f"mb:release-group:{release_group_id}"


def spotify_album_key(album_id: str) -> str:
    return f"spotify:album:{album_id}"
