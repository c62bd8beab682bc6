"""
Tests for the issue list filter predicate and its helpers.
"""

from datetime import datetime, timedelta, timezone

import pytest

from issue_tracker.schemas import IssueFilter
from issue_tracker.services.filters import filter_issues, matches_filters
from issue_tracker.utils import parse_bool, to_iso_timestamp


def _issue(**overrides):
    issue = {
        "id": "a" * 32,
        "issue_title": "Fix login",
        "issue_text": "Login fails on Safari",
        "created_on": "2024-01-15T10:00:00.000Z",
        "updated_on": "2024-01-15T10:00:00.000Z",
        "created_by": "Mike",
        "assigned_to": "",
        "open": True,
        "status_text": "",
    }
    issue.update(overrides)
    return issue


@pytest.fixture
def issues():
    return [
        _issue(id="1" * 32, issue_title="Fix login", created_by="Mike", open=True),
        _issue(id="2" * 32, issue_title="Add search", created_by="Alice", open=False),
        _issue(id="3" * 32, issue_title="Fix logout", created_by="Mike", open=False, assigned_to="Dave"),
    ]


class TestMatchesFilters:
    """Tests for matches_filters."""

    def test_no_filters_matches_everything(self, issues):
        assert all(matches_filters(issue, {}) for issue in issues)

    def test_string_equality_is_exact(self):
        issue = _issue(issue_title="Fix login")
        assert matches_filters(issue, {"issue_title": "Fix login"})
        assert not matches_filters(issue, {"issue_title": "fix login"})
        assert not matches_filters(issue, {"issue_title": "Fix"})

    @pytest.mark.parametrize("value", ["true", "TRUE", "True"])
    def test_open_true_is_case_insensitive(self, value):
        assert matches_filters(_issue(open=True), {"open": value})
        assert not matches_filters(_issue(open=False), {"open": value})

    @pytest.mark.parametrize("value", ["false", "FALSE", "False"])
    def test_open_false_is_case_insensitive(self, value):
        assert matches_filters(_issue(open=False), {"open": value})
        assert not matches_filters(_issue(open=True), {"open": value})

    def test_unrecognized_open_value_matches_nothing(self):
        assert not matches_filters(_issue(open=True), {"open": "yes"})
        assert not matches_filters(_issue(open=False), {"open": "0"})

    def test_reads_attributes_from_objects(self):
        class Row:
            issue_title = "Fix login"
            open = False

        assert matches_filters(Row(), {"issue_title": "Fix login", "open": "false"})
        assert not matches_filters(Row(), {"issue_title": "Fix login", "open": "true"})


class TestFilterIssues:
    """Tests for filter_issues."""

    def test_single_field(self, issues):
        result = filter_issues(issues, {"created_by": "Mike"})
        assert [i["id"] for i in result] == ["1" * 32, "3" * 32]

    def test_combined_filters_are_and(self, issues):
        result = filter_issues(issues, {"created_by": "Mike", "open": "false"})
        assert [i["id"] for i in result] == ["3" * 32]

    def test_no_match_returns_empty_list(self, issues):
        assert filter_issues(issues, {"created_by": "Nobody"}) == []

    def test_preserves_order(self, issues):
        result = filter_issues(issues, {})
        assert result == issues
        assert result is not issues

    def test_filter_by_id(self, issues):
        result = filter_issues(issues, {"id": "2" * 32})
        assert len(result) == 1
        assert result[0]["issue_title"] == "Add search"


class TestIssueFilter:
    """Tests for query filter parsing."""

    def test_empty_values_are_ignored(self):
        filters = IssueFilter.model_validate({"issue_title": "", "created_by": "Mike", "open": None})
        assert filters.active() == {"created_by": "Mike"}

    def test_legacy_id_alias(self):
        filters = IssueFilter.model_validate({"_id": "abc"})
        assert filters.active() == {"id": "abc"}


class TestHelpers:
    """Tests for parse_bool and to_iso_timestamp."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (True, True),
            (False, False),
            ("true", True),
            ("False", False),
            (" TRUE ", True),
            ("", None),
            ("yes", None),
            (1, None),
            (None, None),
        ],
    )
    def test_parse_bool(self, value, expected):
        assert parse_bool(value) is expected

    def test_iso_timestamp_uses_z_suffix_and_milliseconds(self):
        value = datetime(2024, 1, 15, 10, 0, 0, 123456, tzinfo=timezone.utc)
        assert to_iso_timestamp(value) == "2024-01-15T10:00:00.123Z"

    def test_iso_timestamp_converts_to_utc(self):
        value = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone(timedelta(hours=2)))
        assert to_iso_timestamp(value) == "2024-01-15T10:00:00.000Z"

    def test_iso_timestamp_treats_naive_as_utc(self):
        assert to_iso_timestamp(datetime(2024, 1, 15, 10, 0, 0)) == "2024-01-15T10:00:00.000Z"
