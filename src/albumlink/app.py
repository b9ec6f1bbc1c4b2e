"""Application orchestration entry points."""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from albumlink.adapters.cache import InMemoryTTLCache
from albumlink.adapters.musicbrainz import MusicBrainzClient
from albumlink.adapters.spotify import SpotifyClient
from albumlink.adapters.sqlalchemy import SqlAlchemyAlbumRecordStore, is_started, startup
from albumlink.config import (
    get_cache_ttl_config,
    get_musicbrainz_config,
    get_spotify_config_or_none,
)
from albumlink.domain.enrichment import Enricher
from albumlink.domain.resolution import Resolver

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Mapping

    from albumlink.domain.ports import (
        AlbumRecordStore,
        MusicBrainzCatalog,
        ReadThroughCache,
        SpotifyCatalog,
    )
    from albumlink.domain.types import (
        CandidateDescriptor,
        EnrichmentResult,
        FullEnrichmentResult,
        PrimarySourceIdentifiers,
        ResolvedIdentifiers,
    )

log = getLogger(__name__)


@dataclass(slots=True)
class AlbumLinkServices:
    """Resolver and enricher sharing one set of catalog clients and one cache.

    Keep an instance around to reuse the cache and the HTTP connections across
    calls; close it with ``aclose`` when done.
    """

    resolver: Resolver
    enricher: Enricher
    musicbrainz: MusicBrainzCatalog
    spotify: SpotifyCatalog | None
    cache: ReadThroughCache
    owned_musicbrainz: MusicBrainzClient | None = None

    async def aclose(self) -> None:
        """Close the clients ``build_services`` created; injected ones stay open."""
        if self.owned_musicbrainz is not None:
            await self.owned_musicbrainz.aclose()


class _DeferredAlbumRecordStore:
    """Album store that starts the database on the first write.

    Resolving alone never writes, so it leaves the database untouched.
    """

    def __init__(self) -> None:
        self._store: SqlAlchemyAlbumRecordStore | None = None

    async def update(self, album_id: str, fields: Mapping[str, object]) -> None:
        if self._store is None:
            if not is_started():
                startup()
            self._store = SqlAlchemyAlbumRecordStore()
        await self._store.update(album_id, fields)


def build_services(
    *,
    musicbrainz: MusicBrainzCatalog | None = None,
    spotify: SpotifyCatalog | None = None,
    cache: ReadThroughCache | None = None,
    store: AlbumRecordStore | None = None,
) -> AlbumLinkServices:
    """Wire default adapters from the environment; explicit arguments win.

    MusicBrainz needs no configuration. Spotify is optional: without credentials
    the Spotify branch of every call simply yields nothing. The default album
    store only starts the database when enrichment first writes.
    """

    load_dotenv()

    owned_musicbrainz: MusicBrainzClient | None = None
    if musicbrainz is None:
        owned_musicbrainz = MusicBrainzClient(config=get_musicbrainz_config())
        musicbrainz = owned_musicbrainz
    effective_spotify = spotify
    if effective_spotify is None:
        spotify_config = get_spotify_config_or_none()
        if spotify_config is not None:
            effective_spotify = SpotifyClient(config=spotify_config)
    effective_cache = cache if cache is not None else InMemoryTTLCache(get_cache_ttl_config())
    if store is None:
        store = _DeferredAlbumRecordStore()

    resolver = Resolver(musicbrainz=musicbrainz, spotify=effective_spotify)
    enricher = Enricher(
        musicbrainz=musicbrainz,
        spotify=effective_spotify,
        cache=effective_cache,
        store=store,
        resolver=resolver,
    )
    log.debug("Built services (spotify configured: %s)", effective_spotify is not None)
    return AlbumLinkServices(
        resolver=resolver,
        enricher=enricher,
        musicbrainz=musicbrainz,
        spotify=effective_spotify,
        cache=effective_cache,
        owned_musicbrainz=owned_musicbrainz,
    )


@asynccontextmanager
async def _services_for_call(
    services: AlbumLinkServices | None,
) -> AsyncIterator[AlbumLinkServices]:
    if services is not None:
        yield services
        return
    owned = build_services()
    try:
        yield owned
    finally:
        await owned.aclose()


async def resolve_album_ids(
    descriptor: CandidateDescriptor,
    *,
    services: AlbumLinkServices | None = None,
) -> ResolvedIdentifiers:
    """Find MusicBrainz and Spotify ids for ``descriptor``; unresolved ids are ``None``."""

    async with _services_for_call(services) as active:
        return await active.resolver.resolve(descriptor)


async def enrich_album(
    album_id: str,
    release_group_id: str | None,
    spotify_album_id: str | None,
    *,
    services: AlbumLinkServices | None = None,
) -> EnrichmentResult:
    """Fetch catalog metadata for known ids and merge it into album ``album_id``."""

    async with _services_for_call(services) as active:
        return await active.enricher.enrich(album_id, release_group_id, spotify_album_id)


async def enrich_album_from_primary_source(
    album_id: str,
    identifiers: PrimarySourceIdentifiers,
    *,
    services: AlbumLinkServices | None = None,
) -> FullEnrichmentResult:
    async with _services_for_call(services) as active:
        return await active.enricher.enrich_from_primary_source(album_id, identifiers)
