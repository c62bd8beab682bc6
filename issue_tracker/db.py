"""
Engine and session handling.

A DatabaseManager owns one engine and its session factory. The FastAPI
factory builds one and keeps it on ``app.state.database``; tests build
their own against in-memory SQLite.

Usage:
    from issue_tracker.db import DatabaseManager

    manager = DatabaseManager(settings)
    manager.initialize()
    with manager.session() as session:
        issues = IssueRepository(session).list_for_project("apitest")
"""

import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from .config import Settings, get_settings

_IN_MEMORY_SQLITE_URLS = ("sqlite://", "sqlite+pysqlite://")


class Base(DeclarativeBase):
    """Declarative base shared by Project and Issue."""


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless this is switched on per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def engine_options(url: str, settings: Settings) -> dict[str, Any]:
    """
    Keyword arguments for ``create_engine`` suited to the database behind ``url``.

    In-memory SQLite is held on one connection shared by all threads so that
    every session sees the same database. Server databases get a QueuePool
    sized from settings.
    """
    if not url.startswith("sqlite"):
        return {
            "poolclass": QueuePool,
            "pool_size": settings.db_pool_size,
            "max_overflow": settings.db_max_overflow,
            "pool_pre_ping": settings.db_pool_pre_ping,
        }

    options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    if ":memory:" in url or url in _IN_MEMORY_SQLITE_URLS:
        options["poolclass"] = StaticPool
    return options


class DatabaseManager:
    """
    Owns the engine and hands out transactional sessions.

    Nothing connects until ``initialize()`` is called, so building a
    manager at import time is harmless.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.engine: Engine | None = None
        self.session_factory: sessionmaker | None = None

    @property
    def is_initialized(self) -> bool:
        return self.engine is not None

    def initialize(self, database_url: str | None = None) -> None:
        """Create the engine. Later calls are ignored until ``dispose()``."""
        if self.is_initialized:
            return

        url = database_url or self.settings.database_url
        engine = create_engine(url, echo=self.settings.debug, **engine_options(url, self.settings))
        if url.startswith("sqlite"):
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)

        self.engine = engine
        self.session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    def _require_engine(self) -> Engine:
        if self.engine is None:
            raise RuntimeError("DatabaseManager not initialized. Call initialize() first.")
        return self.engine

    def create_all_tables(self) -> None:
        """Create the projects and issues tables if they are missing."""
        engine = self._require_engine()
        from . import models  # noqa: F401  (registers the mapped classes)

        Base.metadata.create_all(bind=engine)

    def drop_all_tables(self) -> None:
        Base.metadata.drop_all(bind=self._require_engine())

    @contextmanager
    def session(self) -> Iterator[Session]:
        """
        Yield a session that commits on success and rolls back on error.

        Usage:
            with manager.session() as session:
                ProjectRepository(session).get_or_create("apitest")
        """
        self._require_engine()
        session = self.session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def health_check(self) -> dict:
        """
        Run ``SELECT 1`` against the database.

        Returns:
            {"healthy": bool, "latency_ms": float, "error": str | None}
        """
        if not self.is_initialized:
            return {"healthy": False, "latency_ms": 0.0, "error": "Database not initialized"}

        started = time.perf_counter()
        error = None
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except Exception as exc:
            error = str(exc)
        latency_ms = round((time.perf_counter() - started) * 1000, 2)
        return {"healthy": error is None, "latency_ms": latency_ms, "error": error}

    def dispose(self) -> None:
        """Close pooled connections; ``initialize()`` may be called again afterwards."""
        if self.engine is not None:
            self.engine.dispose()
        self.engine = None
        self.session_factory = None


__all__ = ["Base", "DatabaseManager", "engine_options"]
