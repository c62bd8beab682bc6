"""
Project model.
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .issue import Issue


class Project(Base):
    """
    A named group of issues.

    Created implicitly the first time an issue is filed under its name.
    The issue list is kept in insertion order.
    """
    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, index=True)

    issues: Mapped[List["Issue"]] = relationship(
        "Issue",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="Issue.seq",
    )

    def __repr__(self) -> str:
        return f"<Project name={self.name!r}>"
