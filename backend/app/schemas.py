"""
Pydantic schemas for request and response validation.

Re-exports from issue_tracker.schemas.
"""

from issue_tracker.schemas import (
    DeleteResult,
    ErrorResponse,
    IssueCreate,
    IssueDelete,
    IssueFilter,
    IssueResponse,
    IssueUpdate,
    UpdateResult,
)

__all__ = [
    "IssueCreate",
    "IssueUpdate",
    "IssueDelete",
    "IssueFilter",
    "IssueResponse",
    "UpdateResult",
    "DeleteResult",
    "ErrorResponse",
]
