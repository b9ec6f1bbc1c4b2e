"""SQLAlchemy adapter package for album records."""

from __future__ import annotations

from .mappings import AlbumRecord, album_table, create_all_tables, mapper_registry, start_mappers
from .repositories import SqlAlchemyAlbumRecordStore
from .unit_of_work import (
    SqlAlchemyUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    session_factory,
    shutdown,
    startup,
)

__all__ = [
    "AlbumRecord",
    "SqlAlchemyAlbumRecordStore",
    "SqlAlchemyUnitOfWork",
    "StartupError",
    "album_table",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "mapper_registry",
    "session_factory",
    "shutdown",
    "start_mappers",
    "startup",
]
