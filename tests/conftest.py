"""
Pytest fixtures for Issue Tracker tests.

Each test gets a fresh in-memory SQLite database through its own
DatabaseManager; nothing touches module-level state.
"""

from datetime import datetime, timedelta, timezone

import pytest

from issue_tracker.config import Settings
from issue_tracker.db import DatabaseManager
from issue_tracker.repositories import IssueRepository, ProjectRepository
from issue_tracker.services import IssueService


class FakeClock:
    """Deterministic clock that advances one second per reading."""

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


@pytest.fixture
def test_settings():
    """Settings pointing at an in-memory database."""
    return Settings(DATABASE_URL="sqlite://", CREATE_TABLES=True, DEBUG=False)


@pytest.fixture
def test_db(test_settings):
    """Create a fresh test database for each test."""
    manager = DatabaseManager(test_settings)
    manager.initialize()
    manager.create_all_tables()

    yield manager

    manager.drop_all_tables()
    manager.dispose()


@pytest.fixture
def test_session(test_db):
    """Get a session that commits when the test finishes."""
    with test_db.session() as session:
        yield session


@pytest.fixture
def fake_clock():
    return FakeClock(datetime(2024, 1, 15, 10, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def issue_repo(test_session):
    return IssueRepository(test_session)


@pytest.fixture
def project_repo(test_session):
    return ProjectRepository(test_session)


@pytest.fixture
def issue_service(issue_repo, project_repo, fake_clock):
    """IssueService over the test session with a deterministic clock."""
    return IssueService(issue_repo, project_repo, clock=fake_clock)


@pytest.fixture
def sample_issue_payload():
    """Create payload with every field set."""
    return {
        "issue_title": "Test Issue 1",
        "issue_text": "Test issue text description",
        "created_by": "Mike",
        "assigned_to": "Dave",
        "status_text": "Investigating",
    }
