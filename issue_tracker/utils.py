"""
Shared Utilities.

Timestamp and value-coercion helpers used by the service layer.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from .constants import FALSE_STRINGS, TRUE_STRINGS


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_iso_timestamp(value: datetime) -> str:
    """
    Format a datetime as an ISO-8601 UTC string with millisecond precision.

    Args:
        value: Datetime to format. Naive values are taken as UTC.

    Returns:
        String such as "2024-01-15T10:00:00.000Z".
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_bool(value: Any) -> Optional[bool]:
    """
    Interpret a boolean sent either as JSON bool or as text.

    Text is matched case-insensitively against "true"/"false".

    Returns:
        The boolean, or None if the value is not recognizable.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_STRINGS:
            return True
        if lowered in FALSE_STRINGS:
            return False
    return None
