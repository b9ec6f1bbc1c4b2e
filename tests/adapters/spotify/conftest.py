"""Shared fixtures for Spotify adapter tests."""

from __future__ import annotations

import pytest

from albumlink.config.spotify import SpotifyConfig
from tests.helpers.spotify import SpotifyPayload


@pytest.fixture
def spotify_config() -> SpotifyConfig:
    return SpotifyConfig(client_id="client", client_secret="secret", ratelimit=None)


@pytest.fixture
def album_payload() -> SpotifyPayload:
    return {
        "id": "5vkqYmiPBYLaalcmjujWxK",
        "name": "In Rainbows",
        "album_type": "album",
        "release_date": "2007-12-28",
        "release_date_precision": "day",
        "total_tracks": 10,
        "popularity": 71,
        "label": "XL Recordings",
        "external_ids": {"upc": "634904032463"},
        "external_urls": {"spotify": "https://open.spotify.com/album/5vkqYmiPBYLaalcmjujWxK"},
        "artists": [{"id": "4Z8W4fKeB5YxbusRsdQVPb", "name": "Radiohead", "type": "artist"}],
        "images": [
            {"url": "https://i.scdn.co/image/640", "width": 640, "height": 640},
            {"url": "https://i.scdn.co/image/300", "width": 300, "height": 300},
            {"url": "https://i.scdn.co/image/64", "width": 64, "height": 64},
        ],
        "tracks": {"items": [], "total": 10},
    }


@pytest.fixture
def search_payload(album_payload: SpotifyPayload) -> SpotifyPayload:
    simplified = {
        key: value
        for key, value in album_payload.items()
        if key not in {"popularity", "label", "external_ids", "tracks"}
    }
    return {
        "albums": {
            "href": "https://api.spotify.com/v1/search?query=x&type=album",
            "limit": 5,
            "offset": 0,
            "total": 2,
            "next": None,
            "previous": None,
            "items": [
                simplified,
                None,
                {
                    "id": "1HrMmB5useeZ0F5lHrMvl0",
                    "name": "In Rainbows Disk 2",
                    "release_date": "2008",
                    "artists": [{"name": "Radiohead"}],
                },
            ],
        }
    }
