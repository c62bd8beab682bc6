"""
Issue Service.

Implements the four operations of the issues resource:
- list_issues: load a project's issues and apply query filters
- create_issue: validate, apply defaults, upsert the project and append
- update_issue: partial overwrite of one issue plus updated_on refresh
- delete_issue: remove one issue from a project

Domain failures are raised as IssueTrackerError subclasses; the router
turns them into JSON error bodies.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Any

from issue_tracker.constants import (
    ERROR_COULD_NOT_DELETE,
    ERROR_COULD_NOT_UPDATE,
    ERROR_MISSING_ID,
    ERROR_NO_UPDATE_FIELDS,
    ERROR_REQUIRED_FIELDS_MISSING,
    OPTIONAL_CREATE_FIELDS,
    RESULT_DELETED,
    RESULT_UPDATED,
)
from issue_tracker.exceptions import IssueNotFoundError, IssueValidationError
from issue_tracker.logging import get_logger
from issue_tracker.repositories import IssueRepository, ProjectRepository
from issue_tracker.schemas import (
    DeleteResult,
    IssueCreate,
    IssueDelete,
    IssueFilter,
    IssueUpdate,
    UpdateResult,
)
from issue_tracker.services.filters import filter_issues
from issue_tracker.utils import parse_bool, to_iso_timestamp, utc_now

logger = get_logger("issue_tracker.issues")


class IssueService:
    """
    Issue operations for a single request.

    Usage:
        with manager.session() as session:
            service = IssueService(IssueRepository(session), ProjectRepository(session))
            issue = service.create_issue("apitest", IssueCreate(...))
    """

    def __init__(
        self,
        issue_repo: IssueRepository,
        project_repo: ProjectRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.issue_repo = issue_repo
        self.project_repo = project_repo
        self.clock = clock

    def _timestamp(self) -> str:
        return to_iso_timestamp(self.clock())

    def list_issues(self, project: str, filters: IssueFilter | None = None) -> list[dict]:
        """
        List the issues of a project that match every supplied filter.

        An unknown project has no issues, so it yields an empty list.
        """
        issues = self.issue_repo.list_for_project(project)
        active = filters.active() if filters else {}
        matched = filter_issues(issues, active)
        logger.debug(
            "issues_listed",
            project=project,
            filters=sorted(active),
            total=len(issues),
            matched=len(matched),
        )
        return [issue.to_dict() for issue in matched]

    def create_issue(self, project: str, payload: IssueCreate) -> dict:
        """
        Create an issue, creating the project on first use.

        Raises:
            IssueValidationError: a required field was not sent
        """
        missing = payload.missing_required()
        if missing:
            logger.info("issue_create_rejected", project=project, missing=missing)
            raise IssueValidationError(ERROR_REQUIRED_FIELDS_MISSING)

        now = self._timestamp()
        fields: dict[str, Any] = {
            "issue_title": payload.issue_title,
            "issue_text": payload.issue_text,
            "created_by": payload.created_by,
            "open": True,
            "created_on": now,
            "updated_on": now,
        }
        for name in OPTIONAL_CREATE_FIELDS:
            fields[name] = getattr(payload, name) or ""

        project_row = self.project_repo.get_or_create(project)
        issue = self.issue_repo.add(project_row, **fields)

        logger.info("issue_created", project=project, issue_id=issue.id)
        return issue.to_dict()

    def update_issue(self, project: str, payload: IssueUpdate) -> dict:
        """
        Apply a partial update to one issue.

        Fields sent as "" are left unchanged; updated_on is refreshed on
        every successful call.

        Raises:
            IssueValidationError: no id, no update fields, or a bad ``open`` value
            IssueNotFoundError: no single issue with that id in the project
        """
        issue_id = payload.id
        # An explicit null id is handled like an absent one
        if issue_id is None:
            raise IssueValidationError(ERROR_MISSING_ID)

        supplied = payload.supplied_fields()
        if not supplied:
            logger.info("issue_update_rejected", project=project, issue_id=issue_id, reason="no_fields")
            raise IssueValidationError(ERROR_NO_UPDATE_FIELDS, issue_id=issue_id)

        values: dict[str, Any] = {}
        for name, value in supplied.items():
            if value is None or value == "":
                continue
            if name == "open":
                parsed = parse_bool(value)
                if parsed is None:
                    logger.info(
                        "issue_update_rejected",
                        project=project,
                        issue_id=issue_id,
                        reason="invalid_open",
                    )
                    raise IssueValidationError(ERROR_COULD_NOT_UPDATE, issue_id=issue_id)
                value = parsed
            values[name] = value
        values["updated_on"] = self._timestamp()

        updated = self.issue_repo.update_fields(project, issue_id, values)
        if updated != 1:
            logger.info("issue_update_rejected", project=project, issue_id=issue_id, reason="not_found")
            raise IssueNotFoundError(ERROR_COULD_NOT_UPDATE, issue_id=issue_id)

        logger.info("issue_updated", project=project, issue_id=issue_id, fields=sorted(values))
        return UpdateResult(result=RESULT_UPDATED, id=issue_id).model_dump()

    def delete_issue(self, project: str, payload: IssueDelete) -> dict:
        """
        Delete one issue from a project.

        Raises:
            IssueValidationError: no id was sent
            IssueNotFoundError: nothing was removed
        """
        issue_id = payload.id
        if issue_id is None:
            raise IssueValidationError(ERROR_MISSING_ID)

        removed = self.issue_repo.delete_from_project(project, issue_id)
        if removed == 0:
            logger.info("issue_delete_rejected", project=project, issue_id=issue_id)
            raise IssueNotFoundError(ERROR_COULD_NOT_DELETE, issue_id=issue_id)

        logger.info("issue_deleted", project=project, issue_id=issue_id)
        return DeleteResult(id=issue_id, result=RESULT_DELETED).model_dump()
