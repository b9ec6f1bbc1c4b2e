"""Value types shared by the resolver, the enricher and the catalog adapters."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


def _utcnow() -> datetime:
    return datetime.now(UTC)


# ---------------------------------------------------------------------------
# Resolver input / output
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CandidateDescriptor:
    """Descriptive metadata for an album as known to the primary data source."""

    title: str
    artists: tuple[str, ...] = ()
    year: int | None = None
    barcode: str | None = None
    catalog_number: str | None = None
    label: str | None = None

    @property
    def primary_artist(self) -> str:
        return self.artists[0] if self.artists else ""


@dataclass(frozen=True, slots=True)
class ResolvedIdentifiers:
    """Foreign ids found for a descriptor. ``None`` means no confident match."""

    musicbrainz_release_group_id: str | None = None
    musicbrainz_release_id: str | None = None
    spotify_album_id: str | None = None


@dataclass(frozen=True, slots=True)
class MusicBrainzMatch:
    release_group_id: str | None
    release_id: str | None = None


@dataclass(frozen=True, slots=True)
class PrimarySourceIdentifiers:
    """Raw identifiers taken from a primary-source (Discogs style) release."""

    title: str
    artists: tuple[str, ...] = ()
    year: int | None = None
    barcodes: tuple[str, ...] = ()
    catalog_number: str | None = None
    label: str | None = None

    def to_descriptor(self) -> CandidateDescriptor:
        return CandidateDescriptor(
            title=self.title,
            artists=self.artists,
            year=self.year,
            barcode=self.barcodes[0] if self.barcodes else None,
            catalog_number=self.catalog_number,
            label=self.label,
        )


# ---------------------------------------------------------------------------
# Catalog-facing values (produced by adapter translators)
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ReleaseMatch:
    """A specific MusicBrainz release returned by an identifier search."""

    release_id: str
    release_group_id: str | None = None
    title: str | None = None


@dataclass(frozen=True, slots=True)
class ReleaseGroupCandidate:
    id: str
    title: str
    artist_name: str = ""


@dataclass(frozen=True, slots=True)
class Tag:
    name: str
    count: int


@dataclass(frozen=True, slots=True)
class ReleaseGroupDetails:
    id: str
    title: str = ""
    tags: tuple[Tag, ...] = ()
    rating: float | None = None
    rating_count: int = 0


@dataclass(frozen=True, slots=True)
class Image:
    url: str
    width: int | None = None
    height: int | None = None

    @property
    def area(self) -> int:
        return (self.width or 0) * (self.height or 0)


@dataclass(frozen=True, slots=True)
class AlbumCandidate:
    id: str
    name: str
    artist_name: str = ""
    release_date: str | None = None

    @property
    def release_year(self) -> int | None:
        if not self.release_date:
            return None
        try:
            return int(self.release_date[:4])
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class AlbumDetails:
    id: str
    name: str = ""
    popularity: int | None = None
    spotify_url: str | None = None
    images: tuple[Image, ...] = ()


# ---------------------------------------------------------------------------
# Enrichment output
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class MusicBrainzEnrichment:
    release_group_id: str
    tags: list[str] = field(default_factory=list[str])
    rating: float | None = None
    rating_count: int = 0


@dataclass(slots=True)
class SpotifyEnrichment:
    album_id: str
    popularity: int | None = None
    spotify_url: str | None = None
    high_res_image: str | None = None


@dataclass(slots=True)
class EnrichmentResult:
    musicbrainz: MusicBrainzEnrichment | None = None
    spotify: SpotifyEnrichment | None = None


@dataclass(slots=True)
class FullEnrichmentResult:
    """Enrichment result together with the identifiers that were resolved for it."""

    enrichment: EnrichmentResult
    resolved_ids: ResolvedIdentifiers

    @property
    def musicbrainz(self) -> MusicBrainzEnrichment | None:
        return self.enrichment.musicbrainz

    @property
    def spotify(self) -> SpotifyEnrichment | None:
        return self.enrichment.spotify


# ---------------------------------------------------------------------------
# Canonical record update
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class AlbumUpdate:
    """Partial update for a canonical album record.

    Fields left as ``None`` are absent from the update and must never overwrite
    a stored value.
    """

    musicbrainz_id: str | None = None
    spotify_id: str | None = None
    mb_tags: Sequence[str] | None = None
    community_rating: float | None = None
    cover_image: str | None = None
    updated_at: datetime = field(default_factory=_utcnow)

    def meaningful_fields(self) -> dict[str, object]:
        fields: dict[str, object] = {}
        if self.musicbrainz_id is not None:
            fields["musicbrainz_id"] = self.musicbrainz_id
        if self.spotify_id is not None:
            fields["spotify_id"] = self.spotify_id
        if self.mb_tags:
            fields["mb_tags"] = list(self.mb_tags)
        if self.community_rating is not None:
            fields["community_rating"] = self.community_rating
        if self.cover_image is not None:
            fields["cover_image"] = self.cover_image
        return fields

    @property
    def is_empty(self) -> bool:
        return not self.meaningful_fields()

    def as_fields(self) -> dict[str, object]:
        fields = self.meaningful_fields()
        fields["updated_at"] = self.updated_at
        return fields
