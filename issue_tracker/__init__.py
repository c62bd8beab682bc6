"""
Issue Tracker Core Library.

This package provides the storage, models, repositories, services and
logging behind the issues API.

Usage:
    # Database
    from issue_tracker.db import DatabaseManager
    from issue_tracker.models import Project, Issue
    from issue_tracker.repositories import IssueRepository, ProjectRepository

    # Config
    from issue_tracker.config import get_settings, Settings

    # Logging
    from issue_tracker.logging import get_logger, configure_logging
"""

__version__ = "1.0.0"
