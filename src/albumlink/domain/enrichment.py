"""Domain services for album enrichment workflows."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING, Final

from .ports.cache import musicbrainz_release_group_key, spotify_album_key
from .types import (
    AlbumUpdate,
    EnrichmentResult,
    FullEnrichmentResult,
    MusicBrainzEnrichment,
    ResolvedIdentifiers,
    SpotifyEnrichment,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from albumlink.config.cache import TTLTier

    from .ports.cache import ReadThroughCache
    from .ports.catalogs import MusicBrainzCatalog, SpotifyCatalog
    from .ports.persistence import AlbumRecordStore
    from .resolution import Resolver
    from .types import AlbumDetails, Image, PrimarySourceIdentifiers, ReleaseGroupDetails, Tag

log = getLogger(__name__)

MAX_TAGS: Final[int] = 20
MIN_TAG_VOTES: Final[int] = 1

# Tags and ratings change slowly; popularity moves daily.
MUSICBRAINZ_TTL_TIER: Final[TTLTier] = "long"
SPOTIFY_TTL_TIER: Final[TTLTier] = "medium"


def select_tags(tags: Iterable[Tag], *, limit: int = MAX_TAGS) -> list[str]:
    """Names of the most voted tags, dropping tags nobody voted for."""

    voted = [tag for tag in tags if tag.count >= MIN_TAG_VOTES]
    voted.sort(key=lambda tag: tag.count, reverse=True)
    return [tag.name for tag in voted[:limit]]


def select_cover_image(images: Sequence[Image]) -> Image | None:
    """Largest image by pixel area; the first one wins a tie."""

    best: Image | None = None
    for image in images:
        if best is None or image.area > best.area:
            best = image
    return best


def extract_musicbrainz(details: ReleaseGroupDetails) -> MusicBrainzEnrichment:
    return MusicBrainzEnrichment(
        release_group_id=details.id,
        tags=select_tags(details.tags),
        rating=details.rating,
        rating_count=details.rating_count,
    )


def extract_spotify(details: AlbumDetails) -> SpotifyEnrichment:
    cover = select_cover_image(details.images)
    return SpotifyEnrichment(
        album_id=details.id,
        popularity=details.popularity,
        spotify_url=details.spotify_url,
        high_res_image=cover.url if cover is not None else None,
    )


def build_album_update(
    musicbrainz_id: str | None,
    spotify_id: str | None,
    result: EnrichmentResult,
) -> AlbumUpdate:
    """Collect only the values that were actually obtained."""

    update = AlbumUpdate(musicbrainz_id=musicbrainz_id, spotify_id=spotify_id)
    if result.musicbrainz is not None:
        if result.musicbrainz.tags:
            update.mb_tags = list(result.musicbrainz.tags)
        update.community_rating = result.musicbrainz.rating
    if result.spotify is not None:
        # Catalog artwork is preferred over whatever the primary source supplied.
        update.cover_image = result.spotify.high_res_image
    return update


class Enricher:
    """Fetch supplementary album metadata and merge it into the canonical record."""

    def __init__(
        self,
        *,
        musicbrainz: MusicBrainzCatalog | None,
        spotify: SpotifyCatalog | None,
        cache: ReadThroughCache,
        store: AlbumRecordStore,
        resolver: Resolver | None = None,
    ) -> None:
        self._musicbrainz = musicbrainz
        self._spotify = spotify
        self._cache = cache
        self._store = store
        self._resolver = resolver

    async def enrich(
        self,
        album_id: str,
        musicbrainz_release_group_id: str | None,
        spotify_album_id: str | None,
    ) -> EnrichmentResult:
        """Enrich ``album_id`` from whichever catalog ids are known.

        Both catalogs are fetched concurrently; a missing id costs no request.
        The canonical record receives at most one partial write, and only with
        values that are present.
        """

        musicbrainz, spotify = await asyncio.gather(
            self._enrich_from_musicbrainz(album_id, musicbrainz_release_group_id),
            self._enrich_from_spotify(album_id, spotify_album_id),
        )
        result = EnrichmentResult(musicbrainz=musicbrainz, spotify=spotify)

        update = build_album_update(musicbrainz_release_group_id, spotify_album_id, result)
        await self._write(album_id, update)
        return result

    async def enrich_from_primary_source(
        self,
        album_id: str,
        identifiers: PrimarySourceIdentifiers,
    ) -> FullEnrichmentResult:
        """Resolve catalog ids from primary-source metadata, then enrich with them."""

        resolved = ResolvedIdentifiers()
        if self._resolver is None:
            log.warning("No resolver configured; enriching album %s without catalog ids", album_id)
        else:
            try:
                resolved = await self._resolver.resolve(identifiers.to_descriptor())
            except Exception:
                log.exception("Id resolution failed for %r", identifiers.title)
            else:
                log.info(
                    "Resolved ids for %r: musicbrainz=%s, spotify=%s",
                    identifiers.title,
                    resolved.musicbrainz_release_group_id,
                    resolved.spotify_album_id,
                )

        enrichment = await self.enrich(
            album_id,
            resolved.musicbrainz_release_group_id,
            resolved.spotify_album_id,
        )
        return FullEnrichmentResult(enrichment=enrichment, resolved_ids=resolved)

    async def _enrich_from_musicbrainz(
        self, album_id: str, release_group_id: str | None
    ) -> MusicBrainzEnrichment | None:
        if release_group_id is None:
            return None
        if self._musicbrainz is None:
            log.debug("MusicBrainz is not configured; skipping %s", release_group_id)
            return None
        catalog = self._musicbrainz
        try:
            details = await self._cache.cached(
                musicbrainz_release_group_key(release_group_id),
                lambda: catalog.get_release_group(release_group_id),
                MUSICBRAINZ_TTL_TIER,
            )
        except Exception as exc:  # noqa: BLE001
            log.warning(
                "MusicBrainz fetch failed for release group %s (canonical album %s): %s",
                release_group_id,
                album_id,
                exc,
            )
            return None

        enrichment = extract_musicbrainz(details)
        log.info(
            "MusicBrainz data for %s: %d tags, rating=%s",
            release_group_id,
            len(enrichment.tags),
            enrichment.rating,
        )
        return enrichment

    async def _enrich_from_spotify(
        self, album_id: str, spotify_album_id: str | None
    ) -> SpotifyEnrichment | None:
        if spotify_album_id is None:
            return None
        if self._spotify is None:
            log.debug("Spotify is not configured; skipping %s", spotify_album_id)
            return None
        catalog = self._spotify
        try:
            details = await self._cache.cached(
                spotify_album_key(spotify_album_id),
                lambda: catalog.get_album(spotify_album_id),
                SPOTIFY_TTL_TIER,
            )
        except Exception as exc:  # noqa: BLE001
            log.warning(
                "Spotify fetch failed for Spotify album %s (canonical album %s): %s",
                spotify_album_id,
                album_id,
                exc,
            )
            return None

        enrichment = extract_spotify(details)
        log.info(
            "Spotify data for %s: popularity=%s, image=%s",
            spotify_album_id,
            enrichment.popularity,
            "yes" if enrichment.high_res_image else "no",
        )
        return enrichment

    async def _write(self, album_id: str, update: AlbumUpdate) -> None:
        if update.is_empty:
            log.info("No enrichment data to write for album %s", album_id)
            return
        fields = update.as_fields()
        try:
            await self._store.update(album_id, fields)
        except Exception:
            log.exception("Writing enrichment for album %s failed", album_id)
            return
        log.info(
            "Updated album %s with fields: %s",
            album_id,
            ", ".join(sorted(update.meaningful_fields())),
        )
