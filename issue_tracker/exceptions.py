"""
Domain errors raised by the issue service.

Each error renders to the JSON body the issues API returns, e.g.
``{"id": "...", "error": "could not update"}``.
"""


class IssueTrackerError(Exception):
    """Base class for errors reported back to API clients."""

    def __init__(self, message: str, issue_id: str | None = None):
        self.message = message
        self.issue_id = issue_id
        super().__init__(message)

    def to_body(self) -> dict:
        """Render the error as the API response body."""
        if self.issue_id is None:
            return {"error": self.message}
        return {"id": self.issue_id, "error": self.message}


class IssueValidationError(IssueTrackerError):
    """Raised when a request is missing required data."""


class IssueNotFoundError(IssueTrackerError):
    """Raised when the targeted issue does not exist or is not unique."""


__all__ = ["IssueTrackerError", "IssueValidationError", "IssueNotFoundError"]
