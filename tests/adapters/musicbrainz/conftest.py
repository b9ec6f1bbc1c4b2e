"""Shared fixtures for MusicBrainz adapter tests."""

from __future__ import annotations

import pytest

from albumlink.config.http_resilience import ResilienceConfig
from albumlink.config.musicbrainz import MusicBrainzConfig

MusicBrainzPayload = dict[str, object]


@pytest.fixture
def musicbrainz_config() -> MusicBrainzConfig:
    return MusicBrainzConfig(
        resilience=ResilienceConfig(
            name="musicbrainz",
            base_url="https://musicbrainz.test/ws/2",
            cache=None,
        )
    )


@pytest.fixture
def release_group_payload() -> MusicBrainzPayload:
    return {
        "id": "b3b7e934-445b-4c68-a097-730c6a6d47e6",
        "title": "In Rainbows",
        "primary-type": "Album",
        "secondary-types": [],
        "first-release-date": "2007-10-10",
        "disambiguation": "",
        "artist-credit": [
            {
                "name": "Radiohead",
                "joinphrase": "",
                "artist": {
                    "id": "a74b1b7f-71a5-4011-9441-d0b5e4122711",
                    "name": "Radiohead",
                    "sort-name": "Radiohead",
                    "type": "Group",
                },
            }
        ],
        "tags": [
            {"name": "alternative rock", "count": 12},
            {"name": "art rock", "count": 7},
        ],
        "rating": {"votes-count": 210, "value": 4.6},
    }


@pytest.fixture
def release_search_payload() -> MusicBrainzPayload:
    return {
        "created": "2024-01-01T00:00:00.000Z",
        "count": 1,
        "offset": 0,
        "releases": [
            {
                "id": "f8b1c0a6-1d41-4c59-8a36-5f3a8a7f2b6c",
                "score": 100,
                "title": "In Rainbows",
                "status": "Official",
                "barcode": "634904032",
                "release-group": {
                    "id": "b3b7e934-445b-4c68-a097-730c6a6d47e6",
                    "title": "In Rainbows",
                    "primary-type": "Album",
                },
                "label-info": [
                    {"catalog-number": "XLCD324", "label": {"id": "l-1", "name": "XL Recordings"}}
                ],
            }
        ],
    }


@pytest.fixture
def release_group_search_payload(release_group_payload: MusicBrainzPayload) -> MusicBrainzPayload:
    return {
        "created": "2024-01-01T00:00:00.000Z",
        "count": 2,
        "offset": 0,
        "release-groups": [
            {**release_group_payload, "score": 100},
            {
                "id": "0c7b6a1c-3c1f-4b5d-9a55-4f7d0a9e4c11",
                "title": "In Rainbows Disk 2",
                "score": 88,
                "artist-credit": [
                    {"name": "Radiohead", "artist": {"id": "x", "name": "Radiohead"}}
                ],
            },
        ],
    }
