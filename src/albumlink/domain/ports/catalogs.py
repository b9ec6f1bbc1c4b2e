"""Ports for the external music catalogs queried during resolution and enrichment."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from albumlink.domain.types import (
        AlbumCandidate,
        AlbumDetails,
        ReleaseGroupCandidate,
        ReleaseGroupDetails,
        ReleaseMatch,
    )


@runtime_checkable
class MusicBrainzCatalog(Protocol):
    """Read access to MusicBrainz releases and release groups.

    Implementations are expected to rate limit themselves and may raise on any
    transport or HTTP failure.
    """

    async def get_release_group(self, release_group_id: str) -> ReleaseGroupDetails: ...

    async def search_release_groups(
        self, query: str, limit: int = 25
    ) -> list[ReleaseGroupCandidate]: ...

    async def search_by_barcode(self, barcode: str) -> list[ReleaseMatch]: ...

    async def search_by_catno(
        self, catno: str, label: str | None = None
    ) -> list[ReleaseMatch]: ...


@runtime_checkable
class SpotifyCatalog(Protocol):
    """Read access to Spotify albums."""

    async def get_album(self, album_id: str) -> AlbumDetails: ...

    async def search_albums(self, query: str, limit: int = 20) -> list[AlbumCandidate]: ...
