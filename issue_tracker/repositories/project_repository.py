"""Project repository."""

from sqlalchemy.exc import IntegrityError

from issue_tracker.models import Project

from .base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project lookups and implicit creation."""

    model = Project

    def get_by_name(self, name: str) -> Project | None:
        """Get a project by its name."""
        return self.session.query(Project).filter(Project.name == name).one_or_none()

    def get_or_create(self, name: str) -> Project:
        """
        Return the project called ``name``, creating it if it does not exist.

        The insert runs inside a savepoint so that losing a creation race to
        another writer (unique violation on ``name``) falls back to reading
        the winner's row instead of failing the request.
        """
        project = self.get_by_name(name)
        if project is not None:
            return project

        try:
            with self.session.begin_nested():
                project = self.create(name=name)
        except IntegrityError:
            project = self.get_by_name(name)
            if project is None:
                raise
        return project
