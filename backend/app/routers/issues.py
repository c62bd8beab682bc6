"""
Issue tracking endpoints.

One resource, ``/issues/{project}``, with list/create/update/delete.
Domain errors raised by IssueService are rendered by the
IssueTrackerError handler in ``error_handlers``.
"""

from fastapi import APIRouter, Depends, Query

from issue_tracker.services import IssueService

from ..dependencies import get_issue_service, get_request_body
from ..schemas import (
    DeleteResult,
    ErrorResponse,
    IssueCreate,
    IssueDelete,
    IssueFilter,
    IssueResponse,
    IssueUpdate,
    UpdateResult,
)

router = APIRouter(prefix="/issues", tags=["issues"])

# Error bodies; returned with status 200 unless ERROR_STATUS_CODES is set
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or invalid fields"},
    404: {"model": ErrorResponse, "description": "No such issue in the project"},
}


@router.get("/{project}", response_model=list[IssueResponse])
def list_issues(
    project: str,
    id: str | None = Query(None, description="Filter by issue id"),
    legacy_id: str | None = Query(None, alias="_id", include_in_schema=False),
    issue_title: str | None = Query(None, description="Filter by exact title"),
    issue_text: str | None = Query(None, description="Filter by exact text"),
    created_on: str | None = Query(None, description="Filter by creation timestamp"),
    updated_on: str | None = Query(None, description="Filter by last update timestamp"),
    created_by: str | None = Query(None, description="Filter by author"),
    assigned_to: str | None = Query(None, description="Filter by assignee"),
    status_text: str | None = Query(None, description="Filter by status text"),
    open: str | None = Query(None, description="Filter by open state: 'true' or 'false'"),
    service: IssueService = Depends(get_issue_service),
):
    """List a project's issues, keeping those that match every given filter."""
    filters = IssueFilter.model_validate(
        {
            "id": id or legacy_id,
            "issue_title": issue_title,
            "issue_text": issue_text,
            "created_on": created_on,
            "updated_on": updated_on,
            "created_by": created_by,
            "assigned_to": assigned_to,
            "status_text": status_text,
            "open": open,
        }
    )
    return service.list_issues(project, filters)


@router.post("/{project}", response_model=IssueResponse, responses=ERROR_RESPONSES)
def create_issue(
    project: str,
    body: dict = Depends(get_request_body),
    service: IssueService = Depends(get_issue_service),
):
    """Create an issue; the project is created on its first issue."""
    return service.create_issue(project, IssueCreate.model_validate(body))


@router.put("/{project}", response_model=UpdateResult, responses=ERROR_RESPONSES)
def update_issue(
    project: str,
    body: dict = Depends(get_request_body),
    service: IssueService = Depends(get_issue_service),
):
    """Partially update an issue. Fields sent as empty strings are left unchanged."""
    return service.update_issue(project, IssueUpdate.model_validate(body))


@router.delete("/{project}", response_model=DeleteResult, responses=ERROR_RESPONSES)
def delete_issue(
    project: str,
    body: dict = Depends(get_request_body),
    service: IssueService = Depends(get_issue_service),
):
    """Delete an issue by id."""
    return service.delete_issue(project, IssueDelete.model_validate(body))
