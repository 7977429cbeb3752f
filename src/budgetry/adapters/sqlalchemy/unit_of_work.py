"""SQLAlchemy-backed unit of work for proposal imports."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Self

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from budgetry.adapters.sqlalchemy.mappings import start_mappers
from budgetry.adapters.sqlalchemy.migrations import upgrade_head
from budgetry.adapters.sqlalchemy.repositories import (
    SqlAlchemyActionLogRepository,
    SqlAlchemyBudgetRepository,
    SqlAlchemyComponentRepository,
    SqlAlchemyProjectRepository,
    SqlAlchemyProposalRepository,
    SqlAlchemyProvenanceLinkRepository,
    SqlAlchemyUserRepository,
    is_link_conflict,
)
from budgetry.config import get_database_config
from budgetry.domain.errors import ConstraintViolationError
from budgetry.domain.ports.unit_of_work import ImportRepositories, RepositoryCollection

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the adapter is used before ``startup()`` or outside a ``with`` block."""


@dataclass(slots=True)
class _AdapterState:
    engine: Engine | None = None
    session_factory: sessionmaker[Session] | None = None

    def require_session_factory(self) -> sessionmaker[Session]:
        if self.session_factory is None:
            raise StartupError(
                "SQLAlchemy adapter not started; call "
                "budgetry.adapters.sqlalchemy.startup() first."
            )
        return self.session_factory


_STATE = _AdapterState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Map the domain classes, migrate the schema and bind the session factory.

    Without ``engine`` one is created from ``database_uri`` or the environment.
    Starting twice needs ``force=True``; the previous engine is left to its owner.
    """

    if _STATE.engine is not None and not force:
        raise StartupError("SQLAlchemy adapter already started; pass force=True to restart")

    if engine is None:
        database = get_database_config()
        engine = create_engine(database_uri or database.uri, echo=database.echo)

    start_mappers()
    upgrade_head(engine=engine)

    _STATE.engine = engine
    _STATE.session_factory = sessionmaker(bind=engine, expire_on_commit=False)
    log.debug("SQLAlchemy adapter started on %s", engine.url.render_as_string(hide_password=True))


def configured_engine() -> Engine | None:
    return _STATE.engine


def is_started() -> bool:
    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the engine and forget it. Safe to call when not started."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None
    _STATE.session_factory = None


class BaseSqlAlchemyUnitOfWork[TRepositories: RepositoryCollection](ABC):
    """One session per ``with`` block; rolled back when the block raises.

    ``commit`` reports duplicate provenance links as ``ConstraintViolationError``;
    every other integrity failure propagates as SQLAlchemy raised it.
    """

    def __init__(self, session_factory: sessionmaker[Session] | None = None) -> None:
        self._session_factory = session_factory or _STATE.require_session_factory()
        self._session: Session | None = None
        self._repositories: TRepositories | None = None

    @abstractmethod
    def _build_repositories(self, session: Session) -> TRepositories: ...

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work used outside of its with block")
        return self._session

    @property
    def repositories(self) -> TRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work used outside of its with block")
        return self._repositories

    def __enter__(self) -> Self:
        if self._session is not None:
            raise StartupError("Unit of work is already active")
        self._session = self._session_factory()
        self._repositories = self._build_repositories(self._session)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        try:
            if exc_type is not None:
                session.rollback()
        finally:
            session.close()
            self._session = None
            self._repositories = None
        return False

    def commit(self) -> None:
        try:
            self.session.commit()
        except IntegrityError as exc:
            if not is_link_conflict(exc):
                raise
            raise ConstraintViolationError(str(exc.orig)) from exc

    def rollback(self) -> None:
        self.session.rollback()


class SqlAlchemyImportUnitOfWork(BaseSqlAlchemyUnitOfWork[ImportRepositories]):
    def _build_repositories(self, session: Session) -> ImportRepositories:
        return ImportRepositories(
            users=SqlAlchemyUserRepository(session),
            components=SqlAlchemyComponentRepository(session),
            budgets=SqlAlchemyBudgetRepository(session),
            proposals=SqlAlchemyProposalRepository(session),
            projects=SqlAlchemyProjectRepository(session),
            provenance_links=SqlAlchemyProvenanceLinkRepository(session),
            action_logs=SqlAlchemyActionLogRepository(session),
        )


if TYPE_CHECKING:
    from budgetry.domain.ports.unit_of_work import ImportUnitOfWork

    _uow_check: ImportUnitOfWork = SqlAlchemyImportUnitOfWork()
