"""
Issue repository with per-issue conditional writes.
"""

from typing import Any

from sqlalchemy import select

from issue_tracker.models import Issue, Project

from .base import BaseRepository


class IssueRepository(BaseRepository[Issue]):
    """
    Repository for the issues filed under a project.

    Key features:
    - Issues are returned in insertion order
    - Updates and deletes are single statements scoped to (project, id),
      so concurrent writers never overwrite each other's issues
    """

    model = Issue

    @staticmethod
    def _project_pk(project_name: str):
        return select(Project.id).where(Project.name == project_name).scalar_subquery()

    def list_for_project(self, project_name: str) -> list[Issue]:
        """Get all issues of a project in insertion order (empty if the project is unknown)."""
        return (
            self.session.query(Issue)
            .join(Issue.project)
            .filter(Project.name == project_name)
            .order_by(Issue.seq)
            .all()
        )

    def get_in_project(self, project_name: str, issue_id: str) -> Issue | None:
        """Get a single issue by its public id within a project."""
        return (
            self.session.query(Issue)
            .filter(
                Issue.project_id == self._project_pk(project_name),
                Issue.id == issue_id,
            )
            .one_or_none()
        )

    def add(self, project: Project, **fields: Any) -> Issue:
        """Append a new issue to ``project``. The store assigns its id."""
        return self.create(project=project, **fields)

    def update_fields(self, project_name: str, issue_id: str, values: dict[str, Any]) -> int:
        """
        Overwrite ``values`` on the issue with ``issue_id`` in one UPDATE.

        The statement runs in a savepoint that is rolled back unless exactly
        one row changed.

        Returns:
            Number of issues updated (0 or 1)
        """
        savepoint = self.session.begin_nested()
        updated = (
            self.session.query(Issue)
            .filter(
                Issue.project_id == self._project_pk(project_name),
                Issue.id == issue_id,
            )
            .update(values, synchronize_session="fetch")
        )
        if updated != 1:
            savepoint.rollback()
            return 0
        savepoint.commit()
        return updated

    def delete_from_project(self, project_name: str, issue_id: str) -> int:
        """
        Remove every issue of the project carrying ``issue_id``.

        Returns:
            Number of issues removed
        """
        result = (
            self.session.query(Issue)
            .filter(
                Issue.project_id == self._project_pk(project_name),
                Issue.id == issue_id,
            )
            .delete(synchronize_session="fetch")
        )
        self.session.flush()
        return result
