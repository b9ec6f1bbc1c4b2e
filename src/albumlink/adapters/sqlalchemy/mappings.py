"""Imperative SQLAlchemy mapping of the ``albums`` table."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING, Final

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Dialect,
    Float,
    Integer,
    String,
    Table,
    TypeDecorator,
    orm,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(UTC)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class UTCDateTime(TypeDecorator[datetime]):
    """Aware UTC timestamps in and out; naive values are read as UTC.

    SQLite drops the offset on storage, so results need it put back.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        del dialect
        return None if value is None else _as_utc(value)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        del dialect
        return None if value is None else _as_utc(value)


@dataclass(eq=False)
class AlbumRecord:
    """Canonical album row as owned by the host application."""

    id: str
    title: str
    year: int | None = None
    musicbrainz_id: str | None = None
    spotify_id: str | None = None
    mb_tags: list[str] = field(default_factory=list[str])
    community_rating: float | None = None
    cover_image: str | None = None
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)


mapper_registry = orm.registry()

album_table = Table(
    "albums",
    mapper_registry.metadata,
    Column("id", String, primary_key=True),
    Column("title", String, nullable=False),
    Column("year", Integer),
    Column("musicbrainz_id", String, index=True),
    Column("spotify_id", String, index=True),
    Column("mb_tags", JSON, nullable=False),
    Column("community_rating", Float),
    Column("cover_image", String),
    Column("created_at", UTCDateTime(), nullable=False, default=_now),
    Column("updated_at", UTCDateTime(), nullable=False, default=_now, onupdate=_now),
)

# Columns enrichment may write; title and year belong to the host application.
WRITABLE_FIELDS: Final[frozenset[str]] = frozenset(
    {"musicbrainz_id", "spotify_id", "mb_tags", "community_rating", "cover_image", "updated_at"}
)


@cache
def start_mappers() -> orm.registry:
    """Map ``AlbumRecord`` onto ``album_table``; later calls are no-ops."""

    mapper_registry.map_imperatively(AlbumRecord, album_table)
    orm.configure_mappers()
    log.debug("Mapped %s onto table %s", AlbumRecord.__name__, album_table.name)
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    mapper_registry.metadata.create_all(engine)
