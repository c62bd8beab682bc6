"""
FastAPI dependency injection module.

Provides dependencies for:
- Repositories
- The issue service (with an overridable clock)
- Request bodies sent as JSON or as urlencoded forms
"""

from collections.abc import Callable
from datetime import datetime

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from issue_tracker.repositories import IssueRepository, ProjectRepository
from issue_tracker.services import IssueService
from issue_tracker.utils import utc_now

from ..database import get_db

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

# =============================================================================
# Repository Dependencies
# =============================================================================


def get_issue_repository(db: Session = Depends(get_db)) -> IssueRepository:
    """Get IssueRepository instance."""
    return IssueRepository(db)


def get_project_repository(db: Session = Depends(get_db)) -> ProjectRepository:
    """Get ProjectRepository instance."""
    return ProjectRepository(db)


# =============================================================================
# Service Dependencies
# =============================================================================


def get_clock() -> Callable[[], datetime]:
    """Clock used for created_on/updated_on. Tests override this."""
    return utc_now


def get_issue_service(
    issue_repo: IssueRepository = Depends(get_issue_repository),
    project_repo: ProjectRepository = Depends(get_project_repository),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> IssueService:
    """Get IssueService instance with injected repositories."""
    return IssueService(issue_repo, project_repo, clock=clock)


# =============================================================================
# Request Body
# =============================================================================


async def get_request_body(request: Request) -> dict:
    """
    Read the request body as a flat mapping.

    Accepts urlencoded/multipart forms and JSON objects. An empty body is
    an empty mapping so that the handlers can report missing fields.
    """
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}

    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        data = await request.json()
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Malformed JSON body")
    if not isinstance(data, dict):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Request body must be a JSON object"
        )
    return data


__all__ = [
    "get_issue_repository",
    "get_project_repository",
    "get_clock",
    "get_issue_service",
    "get_request_body",
]
