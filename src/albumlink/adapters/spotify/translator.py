"""Translate Spotify payloads into domain values."""

from __future__ import annotations

from typing import TYPE_CHECKING

from albumlink.domain.types import AlbumCandidate, AlbumDetails, Image

if TYPE_CHECKING:
    from .schema import SpotifyAlbum, SpotifySimpleAlbum


def translate_album_candidate(album: SpotifySimpleAlbum) -> AlbumCandidate:
    return AlbumCandidate(
        id=album.id,
        name=album.name,
        artist_name=album.artists[0].name if album.artists else "",
        release_date=album.release_date,
    )


def translate_album(album: SpotifyAlbum) -> AlbumDetails:
    return AlbumDetails(
        id=album.id,
        name=album.name,
        popularity=album.popularity,
        spotify_url=album.external_urls.spotify if album.external_urls else None,
        images=tuple(
            Image(url=image.url, width=image.width, height=image.height) for image in album.images
        ),
    )
