"""Cross-catalog id resolution for albums.

MusicBrainz is tried with an ordered chain of strategies (barcode, catalog
number, fuzzy search), stopping at the first match. Spotify is a single scored
search. Both catalogs are queried concurrently and any failure inside one of
them only costs that catalog its id.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final, Protocol, TypeVar

from .similarity import similarity
from .types import MusicBrainzMatch, ResolvedIdentifiers

if TYPE_CHECKING:
    from collections.abc import Awaitable, Sequence

    from .ports.catalogs import MusicBrainzCatalog, SpotifyCatalog
    from .types import AlbumCandidate, CandidateDescriptor, ReleaseGroupCandidate, ReleaseMatch

log = getLogger(__name__)

Scorer = Callable[[str, str], float]

T = TypeVar("T")

SEARCH_LIMIT: Final[int] = 5
MUSICBRAINZ_MIN_SCORE: Final[float] = 0.7
SPOTIFY_MIN_SCORE: Final[float] = 0.6

MUSICBRAINZ_TITLE_WEIGHT: Final[float] = 0.6
MUSICBRAINZ_ARTIST_WEIGHT: Final[float] = 0.4

SPOTIFY_TITLE_WEIGHT: Final[float] = 0.45
SPOTIFY_ARTIST_WEIGHT: Final[float] = 0.4
SPOTIFY_YEAR_WEIGHT: Final[float] = 0.15

# Weighted sums are rounded before the threshold comparison so that a score
# meant to land on a threshold is not pushed over it by float error.
_SCORE_DIGITS: Final[int] = 10


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def year_proximity(wanted: int | None, found: int | None) -> float:
    """Score how close two release years are; unknown years do not penalise."""

    if wanted is None or found is None:
        return 1.0
    diff = abs(wanted - found)
    if diff == 0:
        return 1.0
    return max(0.5, 1.0 - 0.15 * diff)


def score_release_group(
    descriptor: CandidateDescriptor,
    candidate: ReleaseGroupCandidate,
    *,
    scorer: Scorer = similarity,
) -> float:
    title_score = scorer(descriptor.title, candidate.title)
    artist_score = scorer(descriptor.primary_artist, candidate.artist_name)
    score = MUSICBRAINZ_TITLE_WEIGHT * title_score + MUSICBRAINZ_ARTIST_WEIGHT * artist_score
    return round(score, _SCORE_DIGITS)


def score_album(
    descriptor: CandidateDescriptor,
    candidate: AlbumCandidate,
    *,
    scorer: Scorer = similarity,
) -> float:
    title_score = scorer(descriptor.title, candidate.name)
    artist_score = scorer(descriptor.primary_artist, candidate.artist_name)
    year_score = year_proximity(descriptor.year, candidate.release_year)
    score = (
        SPOTIFY_TITLE_WEIGHT * title_score
        + SPOTIFY_ARTIST_WEIGHT * artist_score
        + SPOTIFY_YEAR_WEIGHT * year_score
    )
    return round(score, _SCORE_DIGITS)


def _best(
    candidates: Sequence[T],
    score: Callable[[T], float],
) -> tuple[T | None, float]:
    best: T | None = None
    best_score = 0.0
    for candidate in candidates:
        candidate_score = score(candidate)
        if best is None or candidate_score > best_score:
            best = candidate
            best_score = candidate_score
    return best, best_score


# ---------------------------------------------------------------------------
# MusicBrainz strategies
# ---------------------------------------------------------------------------


class MusicBrainzStrategy(Protocol):
    """One way of finding a descriptor in MusicBrainz."""

    @property
    def name(self) -> str: ...

    async def attempt(self, descriptor: CandidateDescriptor) -> MusicBrainzMatch | None: ...


def _first_release(releases: Sequence[ReleaseMatch], *, strategy: str) -> MusicBrainzMatch | None:
    if not releases:
        log.info("MusicBrainz %s lookup returned no results", strategy)
        return None
    release = releases[0]
    log.info(
        "MusicBrainz %s match: release=%s, release-group=%s",
        strategy,
        release.release_id,
        release.release_group_id,
    )
    return MusicBrainzMatch(release_group_id=release.release_group_id, release_id=release.release_id)


@dataclass(slots=True)
class BarcodeStrategy:
    """Barcodes are authoritative: the first release found is accepted as is."""

    catalog: MusicBrainzCatalog
    name: str = "barcode"

    async def attempt(self, descriptor: CandidateDescriptor) -> MusicBrainzMatch | None:
        barcode = _clean(descriptor.barcode)
        if barcode is None:
            return None
        log.debug("MusicBrainz barcode lookup %r", barcode)
        try:
            releases = await self.catalog.search_by_barcode(barcode)
        except Exception as exc:  # noqa: BLE001
            log.warning("MusicBrainz barcode lookup failed for %r: %s", barcode, exc)
            return None
        return _first_release(releases, strategy=self.name)


@dataclass(slots=True)
class CatalogNumberStrategy:
    """Catalog number, narrowed by label when one is known; first result wins."""

    catalog: MusicBrainzCatalog
    name: str = "catalog number"

    async def attempt(self, descriptor: CandidateDescriptor) -> MusicBrainzMatch | None:
        catno = _clean(descriptor.catalog_number)
        if catno is None:
            return None
        label = _clean(descriptor.label)
        log.debug("MusicBrainz catno lookup %r (label=%r)", catno, label)
        try:
            releases = await self.catalog.search_by_catno(catno, label)
        except Exception as exc:  # noqa: BLE001
            log.warning("MusicBrainz catno lookup failed for %r: %s", catno, exc)
            return None
        return _first_release(releases, strategy=self.name)


def musicbrainz_search_query(descriptor: CandidateDescriptor) -> str:
    query = f'release:"{descriptor.title}" AND artist:"{descriptor.primary_artist}"'
    if descriptor.year:
        query += f" AND date:{descriptor.year}*"
    return query


@dataclass(slots=True)
class FuzzySearchStrategy:
    """Free-text release-group search, accepted only above the confidence threshold."""

    catalog: MusicBrainzCatalog
    scorer: Scorer = similarity
    limit: int = SEARCH_LIMIT
    min_score: float = MUSICBRAINZ_MIN_SCORE
    name: str = "fuzzy search"

    async def attempt(self, descriptor: CandidateDescriptor) -> MusicBrainzMatch | None:
        query = musicbrainz_search_query(descriptor)
        log.debug("MusicBrainz fuzzy search %r", query)
        try:
            candidates = await self.catalog.search_release_groups(query, self.limit)
        except Exception as exc:  # noqa: BLE001
            log.warning("MusicBrainz fuzzy search failed for %r: %s", query, exc)
            return None

        if not candidates:
            log.info("MusicBrainz fuzzy search returned no results for %r", query)
            return None

        best, best_score = _best(
            candidates,
            lambda candidate: score_release_group(descriptor, candidate, scorer=self.scorer),
        )
        if best is None or best_score <= self.min_score:
            log.info(
                "MusicBrainz fuzzy search best score %.3f not above threshold %.2f",
                best_score,
                self.min_score,
            )
            return None

        log.info("MusicBrainz fuzzy match %r (score=%.3f)", best.title, best_score)
        # A release group does not pin down a specific release.
        return MusicBrainzMatch(release_group_id=best.id, release_id=None)


def default_musicbrainz_strategies(
    catalog: MusicBrainzCatalog,
    *,
    scorer: Scorer = similarity,
) -> tuple[MusicBrainzStrategy, ...]:
    return (
        BarcodeStrategy(catalog),
        CatalogNumberStrategy(catalog),
        FuzzySearchStrategy(catalog, scorer=scorer),
    )


# ---------------------------------------------------------------------------
# Spotify
# ---------------------------------------------------------------------------


def spotify_search_query(descriptor: CandidateDescriptor) -> str:
    query = f"album:{descriptor.title} artist:{descriptor.primary_artist}"
    if descriptor.year:
        query += f" year:{descriptor.year}"
    return query


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------


class Resolver:
    """Find MusicBrainz and Spotify ids for a candidate album.

    ``resolve`` never raises: every failure, low-confidence match or missing
    collaborator simply leaves the corresponding id as ``None``.
    """

    def __init__(
        self,
        *,
        musicbrainz: MusicBrainzCatalog | None,
        spotify: SpotifyCatalog | None = None,
        scorer: Scorer = similarity,
        strategies: Sequence[MusicBrainzStrategy] | None = None,
        spotify_limit: int = SEARCH_LIMIT,
        spotify_min_score: float = SPOTIFY_MIN_SCORE,
    ) -> None:
        self._spotify = spotify
        self._scorer = scorer
        self._spotify_limit = spotify_limit
        self._spotify_min_score = spotify_min_score
        if strategies is not None:
            self._strategies = tuple(strategies)
        elif musicbrainz is not None:
            self._strategies = default_musicbrainz_strategies(musicbrainz, scorer=scorer)
        else:
            self._strategies = ()

    @property
    def strategies(self) -> tuple[MusicBrainzStrategy, ...]:
        return self._strategies

    async def resolve(self, descriptor: CandidateDescriptor) -> ResolvedIdentifiers:
        log.info(
            "Resolving ids for %r by %s",
            descriptor.title,
            ", ".join(descriptor.artists) or "<unknown artist>",
        )
        mb_match, spotify_album_id = await asyncio.gather(
            _isolated(self.resolve_musicbrainz(descriptor), catalog="MusicBrainz"),
            _isolated(self.resolve_spotify(descriptor), catalog="Spotify"),
        )
        resolved = ResolvedIdentifiers(
            musicbrainz_release_group_id=mb_match.release_group_id if mb_match else None,
            musicbrainz_release_id=mb_match.release_id if mb_match else None,
            spotify_album_id=spotify_album_id,
        )
        log.info("Resolved ids for %r: %s", descriptor.title, resolved)
        return resolved

    async def resolve_musicbrainz(
        self, descriptor: CandidateDescriptor
    ) -> MusicBrainzMatch | None:
        for strategy in self._strategies:
            match = await strategy.attempt(descriptor)
            if match is not None:
                return match
        return None

    async def resolve_spotify(self, descriptor: CandidateDescriptor) -> str | None:
        if self._spotify is None:
            log.debug("Spotify is not configured; skipping album search")
            return None

        query = spotify_search_query(descriptor)
        log.debug("Spotify album search %r", query)
        try:
            candidates = await self._spotify.search_albums(query, self._spotify_limit)
        except Exception as exc:  # noqa: BLE001
            log.warning("Spotify album search failed for %r: %s", query, exc)
            return None

        if not candidates:
            log.info("Spotify search returned no results for %r", query)
            return None

        best, best_score = _best(
            candidates,
            lambda candidate: score_album(descriptor, candidate, scorer=self._scorer),
        )
        if best is None or best_score <= self._spotify_min_score:
            log.info(
                "Spotify best score %.3f not above threshold %.2f",
                best_score,
                self._spotify_min_score,
            )
            return None

        log.info(
            "Spotify match %r by %s (score=%.3f)", best.name, best.artist_name, best_score
        )
        return best.id


async def _isolated(awaitable: Awaitable[T | None], *, catalog: str) -> T | None:
    try:
        return await awaitable
    except Exception:
        log.exception("%s resolution failed unexpectedly", catalog)
        return None
