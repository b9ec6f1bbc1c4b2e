from __future__ import annotations

from albumlink.adapters.musicbrainz.schema import (
    MusicBrainzArtistCredit,
    MusicBrainzRelease,
    MusicBrainzReleaseGroup,
)
from albumlink.adapters.musicbrainz.translator import (
    primary_artist_name,
    translate_release,
    translate_release_group,
    translate_release_group_candidate,
)
from albumlink.domain.types import ReleaseGroupCandidate, ReleaseMatch

MusicBrainzPayload = dict[str, object]


def test_primary_artist_prefers_credited_name() -> None:
    credits_ = [
        MusicBrainzArtistCredit.model_validate(
            {"name": "Prince & The Revolution", "artist": {"id": "p", "name": "Prince"}}
        ),
        MusicBrainzArtistCredit.model_validate({"artist": {"id": "r", "name": "The Revolution"}}),
    ]

    assert primary_artist_name(credits_) == "Prince & The Revolution"
    assert primary_artist_name(credits_[1:]) == "The Revolution"
    assert primary_artist_name([]) == ""


def test_translate_release_group_details(release_group_payload: MusicBrainzPayload) -> None:
    group = MusicBrainzReleaseGroup.model_validate(release_group_payload)

    details = translate_release_group(group)

    assert details.title == "In Rainbows"
    assert [tag.name for tag in details.tags] == ["alternative rock", "art rock"]
    assert details.rating == 4.6
    assert details.rating_count == 210
    assert translate_release_group_candidate(group) == ReleaseGroupCandidate(
        id="b3b7e934-445b-4c68-a097-730c6a6d47e6",
        title="In Rainbows",
        artist_name="Radiohead",
    )


def test_release_group_without_rating_or_tags() -> None:
    group = MusicBrainzReleaseGroup.model_validate({"id": "rg-1", "title": "Demo"})

    details = translate_release_group(group)

    assert details.tags == ()
    assert details.rating is None
    assert details.rating_count == 0


def test_release_without_release_group() -> None:
    release = MusicBrainzRelease.model_validate({"id": "rel-1", "title": "Bootleg"})

    assert translate_release(release) == ReleaseMatch(
        release_id="rel-1", release_group_id=None, title="Bootleg"
    )
