"""Album record store backed by SQLAlchemy sessions."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from albumlink.adapters.sqlalchemy.mappings import WRITABLE_FIELDS, AlbumRecord
from albumlink.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy.orm import Session, sessionmaker

log = logging.getLogger(__name__)


class SqlAlchemyAlbumRecordStore:
    """Reads and partially updates canonical album rows.

    ``update`` is the async entry point used by enrichment; the blocking session
    work runs in a worker thread.
    """

    def __init__(self, factory: sessionmaker[Session] | None = None) -> None:
        self._factory = factory

    def add(self, record: AlbumRecord) -> None:
        with SqlAlchemyUnitOfWork(self._factory) as session:
            session.add(record)

    def get(self, album_id: str) -> AlbumRecord | None:
        with SqlAlchemyUnitOfWork(self._factory) as session:
            return session.get(AlbumRecord, album_id)

    def apply_update(self, album_id: str, fields: Mapping[str, object]) -> bool:
        """Write ``fields`` onto the album; returns ``False`` if it does not exist."""

        unknown = set(fields).difference(WRITABLE_FIELDS)
        if unknown:
            msg = f"Cannot update album fields: {', '.join(sorted(unknown))}"
            raise ValueError(msg)

        with SqlAlchemyUnitOfWork(self._factory) as session:
            record = session.get(AlbumRecord, album_id)
            if record is None:
                log.warning("Album %s not found; update skipped", album_id)
                return False
            for name, value in fields.items():
                setattr(record, name, value)
        log.debug("Updated album %s: %s", album_id, ", ".join(sorted(fields)))
        return True

    async def update(self, album_id: str, fields: Mapping[str, object]) -> None:
        await asyncio.to_thread(self.apply_update, album_id, fields)
