"""Engine lifecycle for the album database and the session scope around each write."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from albumlink.adapters.sqlalchemy.mappings import create_all_tables, start_mappers
from albumlink.config.storage import get_database_uri

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = getLogger(__name__)


class StartupError(RuntimeError):
    """The album database was used before ``startup`` or started twice."""


@dataclass(slots=True)
class _EngineSlot:
    engine: Engine | None = None
    sessions: sessionmaker[Session] | None = None

    def bind(self, engine: Engine | None) -> None:
        self.engine = engine
        self.sessions = None if engine is None else sessionmaker(engine, expire_on_commit=False)

    def require_sessions(self) -> sessionmaker[Session]:
        if self.sessions is None:
            raise StartupError("Album database not started; call startup() first")
        return self.sessions


_SLOT = _EngineSlot()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Bind the album database, creating the ``albums`` table when it is missing.

    ``engine`` wins over ``database_uri``, which wins over the configured URI.
    Rebinding an already started database needs ``force=True``.
    """

    if _SLOT.engine is not None and not force:
        raise StartupError("Album database already started; pass force=True to rebind")

    if engine is None:
        engine = create_engine(database_uri or get_database_uri())
    start_mappers()
    create_all_tables(engine)
    _SLOT.bind(engine)
    log.info("Album database ready at %s", engine.url.render_as_string(hide_password=True))


def shutdown() -> None:
    if _SLOT.engine is not None:
        _SLOT.engine.dispose()
    _SLOT.bind(None)


def is_started() -> bool:
    return _SLOT.engine is not None


def configured_engine() -> Engine | None:
    return _SLOT.engine


def session_factory() -> sessionmaker[Session]:
    return _SLOT.require_sessions()


class SqlAlchemyUnitOfWork:
    """Session scope: commits when the block exits cleanly, rolls back when it raises.

    The session factory is looked up on entry, so a unit of work can be created
    before ``startup`` as long as it is entered after.
    """

    def __init__(self, factory: sessionmaker[Session] | None = None) -> None:
        self._factory = factory
        self._session: Session | None = None

    def __enter__(self) -> Session:
        if self._session is not None:
            raise StartupError("Unit of work is already active")
        factory = self._factory or _SLOT.require_sessions()
        self._session = factory()
        return self._session

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session, self._session = self._session, None
        if session is None:
            return False
        try:
            if exc_type is None:
                session.commit()
            else:
                session.rollback()
        finally:
            session.close()
        return False
