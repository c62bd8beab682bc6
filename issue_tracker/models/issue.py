"""
Issue model.
"""

import uuid
from typing import TYPE_CHECKING, Dict

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .project import Project


def new_issue_id() -> str:
    """Generate an opaque issue identifier."""
    return uuid.uuid4().hex


class Issue(Base):
    """
    A bug or feature ticket filed under a project.

    ``seq`` is an internal insertion counter used for ordering; ``id`` is the
    public identifier. Timestamps are stored as the ISO-8601 strings handed
    back to clients, so filters compare them as text.
    """
    __tablename__ = "issues"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(32), unique=True, index=True, default=new_issue_id)
    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), index=True
    )
    issue_title: Mapped[str] = mapped_column(String(512))
    issue_text: Mapped[str] = mapped_column(Text)
    created_by: Mapped[str] = mapped_column(String(255))
    assigned_to: Mapped[str] = mapped_column(String(255), default="")
    status_text: Mapped[str] = mapped_column(String(255), default="")
    open: Mapped[bool] = mapped_column(Boolean, default=True)
    created_on: Mapped[str] = mapped_column(String(40))
    updated_on: Mapped[str] = mapped_column(String(40))

    project: Mapped["Project"] = relationship("Project", back_populates="issues")

    def to_dict(self) -> Dict:
        """
        Convert the issue record into a serializable dictionary.

        Returns:
            Dictionary in the shape returned by the issues API.
        """
        return {
            "id": self.id,
            "issue_title": self.issue_title,
            "issue_text": self.issue_text,
            "created_on": self.created_on,
            "updated_on": self.updated_on,
            "created_by": self.created_by,
            "assigned_to": self.assigned_to,
            "open": self.open,
            "status_text": self.status_text,
        }

    def __repr__(self) -> str:
        return f"<Issue id={self.id!r} title={self.issue_title!r}>"
