"""Domain port definitions for adapters."""

from __future__ import annotations

from .cache import ReadThroughCache, musicbrainz_release_group_key, spotify_album_key
from .catalogs import MusicBrainzCatalog, SpotifyCatalog
from .persistence import AlbumRecordStore

__all__ = [
    "AlbumRecordStore",
    "MusicBrainzCatalog",
    "ReadThroughCache",
    "SpotifyCatalog",
    "musicbrainz_release_group_key",
    "spotify_album_key",
]
