"""
SQLAlchemy models for the Issue Tracker.

Usage:
    from issue_tracker.models import Project, Issue
"""

from .base import Base
from .issue import Issue, new_issue_id
from .project import Project

__all__ = [
    "Base",
    "Project",
    "Issue",
    "new_issue_id",
]
