from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from albumlink.adapters.sqlalchemy import create_all_tables, start_mappers
from albumlink.adapters.sqlalchemy.unit_of_work import shutdown, startup
from tests.helpers.catalogs import PassThroughCache, RecordingStore

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def recording_store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def pass_through_cache() -> PassThroughCache:
    return PassThroughCache()


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    # One shared connection so worker threads see the same in-memory database.
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    start_mappers()
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session_factory(sqlite_engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=sqlite_engine, expire_on_commit=False)


@pytest.fixture
def started_adapter(sqlite_engine: Engine) -> Iterator[Engine]:
    startup(engine=sqlite_engine, force=True)
    try:
        yield sqlite_engine
    finally:
        shutdown()
