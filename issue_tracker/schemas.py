"""
Pydantic schemas for issue requests and responses.

Request models keep every field optional; whether a key was sent at all is
read from ``model_fields_set`` so that "not sent" and "sent as empty string"
stay distinguishable.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .constants import FILTER_FIELDS, REQUIRED_CREATE_FIELDS, UPDATE_FIELDS

# Accept the identifier as "id" or, from older clients, "_id"
_ID_ALIASES = AliasChoices("id", "_id")


class _RequestModel(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class IssueCreate(_RequestModel):
    issue_title: str | None = None
    issue_text: str | None = None
    created_by: str | None = None
    assigned_to: str | None = None
    status_text: str | None = None

    def missing_required(self) -> list[str]:
        """Required fields that were not sent (an explicit null counts as not sent)."""
        return [name for name in REQUIRED_CREATE_FIELDS if getattr(self, name) is None]


class IssueUpdate(_RequestModel):
    id: str | None = Field(default=None, validation_alias=_ID_ALIASES)
    issue_title: str | None = None
    issue_text: str | None = None
    created_by: str | None = None
    assigned_to: str | None = None
    status_text: str | None = None
    open: bool | str | None = None
    created_on: str | None = None
    updated_on: str | None = None

    def supplied_fields(self) -> dict[str, Any]:
        """Update fields present in the request, with their raw values."""
        return {
            name: getattr(self, name)
            for name in UPDATE_FIELDS
            if name in self.model_fields_set
        }


class IssueDelete(_RequestModel):
    id: str | None = Field(default=None, validation_alias=_ID_ALIASES)


class IssueFilter(_RequestModel):
    """Query-string filters for listing issues. Empty values apply no filter."""

    id: str | None = Field(default=None, validation_alias=_ID_ALIASES)
    issue_title: str | None = None
    issue_text: str | None = None
    created_on: str | None = None
    updated_on: str | None = None
    created_by: str | None = None
    assigned_to: str | None = None
    status_text: str | None = None
    open: str | None = None

    def active(self) -> dict[str, str]:
        """Filters that were given a non-empty value."""
        return {
            name: getattr(self, name)
            for name in FILTER_FIELDS
            if getattr(self, name) not in (None, "")
        }


class IssueResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    issue_title: str
    issue_text: str
    created_on: str
    updated_on: str
    created_by: str
    assigned_to: str = ""
    open: bool = True
    status_text: str = ""


class UpdateResult(BaseModel):
    result: str
    id: str


class DeleteResult(BaseModel):
    id: str
    result: str


class ErrorResponse(BaseModel):
    id: str | None = None
    error: str


__all__ = [
    "IssueCreate",
    "IssueUpdate",
    "IssueDelete",
    "IssueFilter",
    "IssueResponse",
    "UpdateResult",
    "DeleteResult",
    "ErrorResponse",
]
