"""Where albumlink keeps its files on disk.

Everything lives under one data directory: ``ALBUMLINK_DATA_DIR`` when set,
otherwise the platform's per-user data location. ``DATABASE_URI`` points the
album record store somewhere else entirely.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Final

DATA_DIR_ENV: Final[str] = "ALBUMLINK_DATA_DIR"
DATABASE_URI_ENV: Final[str] = "DATABASE_URI"
ALBUM_DB_FILENAME: Final[str] = "albumlink.db"
HTTP_CACHE_FILENAME: Final[str] = "http_cache.db"


@dataclass(frozen=True, slots=True)
class DataPaths:
    root: Path

    def ensure(self) -> Path:
        """Create the data directory if needed and return it."""
        self.root.mkdir(parents=True, exist_ok=True)
        return self.root

    @property
    def album_database(self) -> Path:
        return self.ensure() / ALBUM_DB_FILENAME

    @property
    def http_cache(self) -> Path:
        return self.ensure() / HTTP_CACHE_FILENAME


def default_data_root() -> Path:
    if sys.platform == "win32":
        env_name, fallback = "LOCALAPPDATA", Path("AppData") / "Local"
    else:
        env_name, fallback = "XDG_DATA_HOME", Path(".local") / "share"
    configured = os.getenv(env_name)
    base = Path(configured) if configured else Path.home() / fallback
    return base / "albumlink"


def get_data_paths() -> DataPaths:
    override = os.getenv(DATA_DIR_ENV)
    root = Path(override) if override else default_data_root()
    return DataPaths(root=root.expanduser().resolve())


def get_database_uri(paths: DataPaths | None = None) -> str:
    """SQLAlchemy URI of the album record store."""

    override = os.getenv(DATABASE_URI_ENV)
    if override:
        return override
    database = (paths or get_data_paths()).album_database
    return f"sqlite+pysqlite:///{database}"
