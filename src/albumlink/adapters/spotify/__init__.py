"""Spotify catalog adapter."""

from __future__ import annotations

from .client import SpotifyAPIError, SpotifyClient
from .schema import SpotifyAlbum, SpotifyAlbumSearchResponse, SpotifyImage, SpotifySimpleAlbum
from .translator import translate_album, translate_album_candidate

__all__ = [
    "SpotifyAPIError",
    "SpotifyAlbum",
    "SpotifyAlbumSearchResponse",
    "SpotifyClient",
    "SpotifyImage",
    "SpotifySimpleAlbum",
    "translate_album",
    "translate_album_candidate",
]
