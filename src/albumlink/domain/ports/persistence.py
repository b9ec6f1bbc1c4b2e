"""Port for the store that owns canonical album records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping


@runtime_checkable
class AlbumRecordStore(Protocol):
    """Applies partial updates to canonical albums.

    Only the keys present in ``fields`` are written; callers never read the
    result back.
    """

    async def update(self, album_id: str, fields: Mapping[str, object]) -> None: ...
