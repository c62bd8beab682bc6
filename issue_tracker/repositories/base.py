"""Base repository class shared by the project and issue repositories."""

from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from issue_tracker.db import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """
    Base repository bound to one session.

    Usage:
        class ProjectRepository(BaseRepository[Project]):
            model = Project

        repo = ProjectRepository(session)
        project = repo.create(name="apitest")
    """

    model: type[T]

    def __init__(self, session: Session):
        self.session = session

    def create(self, **kwargs) -> T:
        """Add a new record and flush it so store-side defaults are populated."""
        instance = self.model(**kwargs)
        self.session.add(instance)
        self.session.flush()
        return instance
