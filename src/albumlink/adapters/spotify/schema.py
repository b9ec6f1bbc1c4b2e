"""Minimal Pydantic models for the Spotify Web API album endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SpotifyBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class SpotifyArtist(SpotifyBaseModel):
    id: str | None = None
    name: str


class SpotifyImage(SpotifyBaseModel):
    url: str
    width: int | None = None
    height: int | None = None


class SpotifyExternalUrls(SpotifyBaseModel):
    spotify: str | None = None


class SpotifySimpleAlbum(SpotifyBaseModel):
    id: str
    name: str
    release_date: str | None = None
    artists: list[SpotifyArtist] = Field(default_factory=list["SpotifyArtist"])
    images: list[SpotifyImage] = Field(default_factory=list["SpotifyImage"])
    external_urls: SpotifyExternalUrls | None = None


class SpotifyAlbum(SpotifySimpleAlbum):
    popularity: int | None = None


class SpotifyAlbumPage(SpotifyBaseModel):
    items: list[SpotifySimpleAlbum | None] = Field(
        default_factory=list["SpotifySimpleAlbum | None"]
    )


class SpotifyAlbumSearchResponse(SpotifyBaseModel):
    albums: SpotifyAlbumPage = Field(default_factory=SpotifyAlbumPage)
