"""
Application configuration using Pydantic settings.

Re-exports from the issue_tracker.config module so backend code has a
single local import point:
    from .config import get_settings, Settings
"""

from issue_tracker.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
