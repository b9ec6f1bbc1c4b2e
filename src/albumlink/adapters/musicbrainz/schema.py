"""Pydantic models for the MusicBrainz JSON documents albumlink reads.

Only the fields the translators use are modelled. Anything else is kept on
``model_extra`` and reported once per model and key at DEBUG, which is how new
fields in the web service show up in logs.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import ClassVar, TypeAlias

from pydantic import BaseModel, ConfigDict, Field

log = logging.getLogger(__name__)

MBId: TypeAlias = str
MBDate: TypeAlias = str  # YYYY, YYYY-MM or YYYY-MM-DD


class MBEntityType(StrEnum):
    RELEASE = "release"
    RELEASE_GROUP = "release-group"


class MusicBrainzBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    _reported_extras: ClassVar[set[tuple[str, str]]] = set()

    def model_post_init(self, context: object, /) -> None:
        del context
        model = type(self).__name__
        unseen = sorted(
            key for key in self.model_extra or {} if (model, key) not in self._reported_extras
        )
        if unseen:
            self._reported_extras.update((model, key) for key in unseen)
            log.debug("MusicBrainz %s has unmodelled keys: %s", model, ", ".join(unseen))


class MusicBrainzArtist(MusicBrainzBaseModel):
    id: MBId
    name: str


class MusicBrainzArtistCredit(MusicBrainzBaseModel):
    artist: MusicBrainzArtist | None = None
    name: str | None = None
    join_phrase: str | None = Field(default=None, alias="joinphrase")

    @property
    def display_name(self) -> str:
        if self.name:
            return self.name
        return self.artist.name if self.artist is not None else ""


class MusicBrainzTag(MusicBrainzBaseModel):
    name: str
    count: int = 0


class MusicBrainzRating(MusicBrainzBaseModel):
    votes_count: int = Field(default=0, alias="votes-count")
    value: float | None = None


class MusicBrainzReleaseGroupRef(MusicBrainzBaseModel):
    id: MBId
    title: str | None = None
    primary_type: str | None = Field(default=None, alias="primary-type")


class MusicBrainzLabel(MusicBrainzBaseModel):
    name: str


class MusicBrainzLabelInfo(MusicBrainzBaseModel):
    catalog_number: str | None = Field(default=None, alias="catalog-number")
    label: MusicBrainzLabel | None = None


ArtistCredits: TypeAlias = list[MusicBrainzArtistCredit]


class MusicBrainzRelease(MusicBrainzBaseModel):
    id: MBId
    title: str
    date: MBDate | None = None
    barcode: str | None = None
    score: int | None = None
    release_group: MusicBrainzReleaseGroupRef | None = Field(default=None, alias="release-group")
    label_info: list[MusicBrainzLabelInfo] = Field(default_factory=list, alias="label-info")
    artist_credit: ArtistCredits = Field(default_factory=list, alias="artist-credit")


class MusicBrainzReleaseGroup(MusicBrainzBaseModel):
    id: MBId
    title: str
    disambiguation: str | None = None
    score: int | None = None
    primary_type: str | None = Field(default=None, alias="primary-type")
    secondary_types: list[str] = Field(default_factory=list, alias="secondary-types")
    first_release_date: MBDate | None = Field(default=None, alias="first-release-date")
    artist_credit: ArtistCredits = Field(default_factory=list, alias="artist-credit")
    tags: list[MusicBrainzTag] = Field(default_factory=list)
    rating: MusicBrainzRating | None = None


class MusicBrainzReleaseSearch(MusicBrainzBaseModel):
    count: int | None = None
    releases: list[MusicBrainzRelease] = Field(default_factory=list)


class MusicBrainzReleaseGroupSearch(MusicBrainzBaseModel):
    count: int | None = None
    release_groups: list[MusicBrainzReleaseGroup] = Field(
        default_factory=list, alias="release-groups"
    )
