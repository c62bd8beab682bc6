"""
Issue tracker services.

Services hold the request rules (validation, defaults, filtering) and talk
to the store only through repositories.
"""

from issue_tracker.services.filters import filter_issues, matches_filters
from issue_tracker.services.issue_service import IssueService

__all__ = [
    "IssueService",
    "filter_issues",
    "matches_filters",
]
