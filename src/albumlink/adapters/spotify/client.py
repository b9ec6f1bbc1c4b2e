"""Spotipy-based client for Spotify album lookups."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING, Any, Final

import spotipy
from pydantic import ValidationError
from spotipy.oauth2 import SpotifyClientCredentials, SpotifyOauthError

from albumlink.adapters.http_resilience import build_limiter

from .schema import SpotifyAlbum, SpotifyAlbumSearchResponse
from .translator import translate_album, translate_album_candidate

if TYPE_CHECKING:
    from collections.abc import Callable

    from aiolimiter import AsyncLimiter

    from albumlink.config.spotify import SpotifyConfig
    from albumlink.domain.types import AlbumCandidate, AlbumDetails

log = getLogger(__name__)

DEFAULT_SEARCH_LIMIT: Final[int] = 20


class SpotifyAPIError(RuntimeError):
    """Raised when a Spotify request fails or returns an unexpected payload."""


def _build_spotipy_client(config: SpotifyConfig) -> spotipy.Spotify:
    auth_manager = SpotifyClientCredentials(
        client_id=config.client_id,
        client_secret=config.client_secret,
    )
    return spotipy.Spotify(
        auth_manager=auth_manager,
        requests_timeout=config.requests_timeout,
    )


class SpotifyClient:
    """Album lookup and search using client-credentials auth.

    Spotipy is synchronous, so every call runs in a worker thread while holding
    the limiter.
    """

    def __init__(
        self,
        *,
        config: SpotifyConfig,
        client: spotipy.Spotify | None = None,
        limiter: AsyncLimiter | None = None,
    ) -> None:
        self._client = client or _build_spotipy_client(config)
        self._limiter = limiter or build_limiter(config.ratelimit)

    async def get_album(self, album_id: str) -> AlbumDetails:
        raw_payload = await self._call(self._client.album, album_id)  # pyright: ignore[reportUnknownMemberType]
        try:
            album = SpotifyAlbum.model_validate(raw_payload)
        except ValidationError as exc:
            raise SpotifyAPIError(f"Unexpected Spotify album payload for {album_id}: {exc}") from exc
        return translate_album(album)

    async def search_albums(
        self, query: str, limit: int = DEFAULT_SEARCH_LIMIT
    ) -> list[AlbumCandidate]:
        raw_payload = await self._call(self._client.search, q=query, type="album", limit=limit)  # pyright: ignore[reportUnknownMemberType]
        try:
            payload = SpotifyAlbumSearchResponse.model_validate(raw_payload)
        except ValidationError as exc:
            raise SpotifyAPIError(f"Unexpected Spotify search payload for {query!r}: {exc}") from exc
        return [
            translate_album_candidate(album) for album in payload.albums.items if album is not None
        ]

    async def _call(self, func: Callable[..., Any], *args: object, **kwargs: object) -> object:
        try:
            if self._limiter is None:
                return await asyncio.to_thread(func, *args, **kwargs)
            async with self._limiter:
                return await asyncio.to_thread(func, *args, **kwargs)
        except (spotipy.SpotifyException, SpotifyOauthError) as exc:
            raise SpotifyAPIError(str(exc)) from exc
