"""MusicBrainz catalog adapter."""

from __future__ import annotations

from .client import MusicBrainzAPIError, MusicBrainzClient, barcode_query, catno_query
from .schema import (
    MusicBrainzRelease,
    MusicBrainzReleaseGroup,
    MusicBrainzReleaseGroupSearch,
    MusicBrainzReleaseSearch,
)
from .translator import (
    translate_release,
    translate_release_group,
    translate_release_group_candidate,
)

__all__ = [
    "MusicBrainzAPIError",
    "MusicBrainzClient",
    "MusicBrainzRelease",
    "MusicBrainzReleaseGroup",
    "MusicBrainzReleaseGroupSearch",
    "MusicBrainzReleaseSearch",
    "barcode_query",
    "catno_query",
    "translate_release",
    "translate_release_group",
    "translate_release_group_candidate",
]
