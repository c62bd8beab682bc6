"""
Repository pattern implementations for data access.

Repositories provide a clean abstraction over database operations.

Usage:
    from issue_tracker.repositories import IssueRepository

    with manager.session() as session:
        repo = IssueRepository(session)
        issues = repo.list_for_project("apitest")
"""

from .base import BaseRepository
from .issue_repository import IssueRepository
from .project_repository import ProjectRepository

__all__ = [
    "BaseRepository",
    "IssueRepository",
    "ProjectRepository",
]
