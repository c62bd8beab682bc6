"""
Database session dependencies.

The DatabaseManager is created by ``create_app`` and stored on
``app.state.database``; request handlers reach it only through these
dependencies, never through module-level state.
"""

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from issue_tracker.db import DatabaseManager


def get_database(request: Request) -> DatabaseManager:
    """Return the application's DatabaseManager."""
    database = getattr(request.app.state, "database", None)
    if database is None or not database.is_initialized:
        raise RuntimeError(
            "Database not initialized. It is set up during application startup."
        )
    return database


def get_db(database: DatabaseManager = Depends(get_database)) -> Iterator[Session]:
    """
    FastAPI dependency for database sessions.

    Commits when the request succeeds and rolls back when it raises.
    """
    with database.session() as session:
        yield session
