from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from backend.app.dependencies import get_clock
from backend.app.main import create_app
from issue_tracker.config import Settings


PROJECT = "apitest"


def _client_for(settings: Settings, database, clock) -> Iterator[TestClient]:
    app = create_app(settings, database)
    app.dependency_overrides[get_clock] = lambda: clock

    with TestClient(app) as client:
        yield client


@pytest.fixture
def client(test_settings, test_db, fake_clock) -> Iterator[TestClient]:
    """Client using the legacy always-200 error contract."""
    yield from _client_for(test_settings, test_db, fake_clock)


@pytest.fixture
def strict_client(test_db, fake_clock) -> Iterator[TestClient]:
    """Client with ERROR_STATUS_CODES enabled."""
    settings = Settings(
        DATABASE_URL="sqlite://",
        CREATE_TABLES=True,
        DEBUG=False,
        ERROR_STATUS_CODES=True,
    )
    yield from _client_for(settings, test_db, fake_clock)


@pytest.fixture
def create_issue(client):
    """Create an issue through the API and return the response body."""

    def _create(project: str = PROJECT, **fields) -> dict:
        payload = {
            "issue_title": "Title",
            "issue_text": "Text",
            "created_by": "Mike",
        }
        payload.update(fields)
        response = client.post(f"/api/issues/{project}", json=payload)
        assert response.status_code == 200
        return response.json()

    return _create
