"""Translate MusicBrainz payloads into domain values."""

from __future__ import annotations

from typing import TYPE_CHECKING

from albumlink.domain.types import (
    ReleaseGroupCandidate,
    ReleaseGroupDetails,
    ReleaseMatch,
    Tag,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .schema import (
        MusicBrainzArtistCredit,
        MusicBrainzRelease,
        MusicBrainzReleaseGroup,
    )


def primary_artist_name(credits_: Sequence[MusicBrainzArtistCredit]) -> str:
    """Name of the first credited artist, as credited on the release."""

    if not credits_:
        return ""
    return credits_[0].display_name


def translate_release(release: MusicBrainzRelease) -> ReleaseMatch:
    return ReleaseMatch(
        release_id=release.id,
        release_group_id=release.release_group.id if release.release_group else None,
        title=release.title,
    )


def translate_release_group_candidate(group: MusicBrainzReleaseGroup) -> ReleaseGroupCandidate:
    return ReleaseGroupCandidate(
        id=group.id,
        title=group.title,
        artist_name=primary_artist_name(group.artist_credit),
    )


def translate_release_group(group: MusicBrainzReleaseGroup) -> ReleaseGroupDetails:
    rating = group.rating
    return ReleaseGroupDetails(
        id=group.id,
        title=group.title,
        tags=tuple(Tag(name=tag.name, count=tag.count) for tag in group.tags),
        rating=rating.value if rating is not None else None,
        rating_count=rating.votes_count if rating is not None else 0,
    )
