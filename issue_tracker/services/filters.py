"""
In-memory filtering of a project's issue list.

Every active filter must match (logical AND). Text fields compare by exact
string equality; ``open`` is parsed from "true"/"false" first.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from issue_tracker.utils import parse_bool


def _field_value(issue: Any, name: str) -> Any:
    if isinstance(issue, Mapping):
        return issue.get(name)
    return getattr(issue, name, None)


def matches_filters(issue: Any, filters: Mapping[str, str]) -> bool:
    """
    Check a single issue against the given filters.

    Args:
        issue: Issue model instance or serialized issue dict
        filters: Field name -> query value, only non-empty values

    Returns:
        True if the issue satisfies every filter
    """
    for name, expected in filters.items():
        actual = _field_value(issue, name)
        if name == "open":
            wanted = parse_bool(expected)
            # An unrecognized value cannot equal any stored boolean
            if wanted is None or bool(actual) != wanted:
                return False
        elif actual is None or str(actual) != expected:
            return False
    return True


def filter_issues(issues: Iterable[Any], filters: Mapping[str, str]) -> list[Any]:
    """Keep the issues matching all filters, preserving their order."""
    if not filters:
        return list(issues)
    return [issue for issue in issues if matches_filters(issue, filters)]
