"""
Application constants for the Issue Tracker.

Contains issue field groupings and the error/result messages that make up
the public JSON contract.
"""

# =============================================================================
# Issue Fields
# =============================================================================

# Fields a client must send when creating an issue
REQUIRED_CREATE_FIELDS = ("issue_title", "issue_text", "created_by")

# Optional create fields, stored as "" when omitted
OPTIONAL_CREATE_FIELDS = ("assigned_to", "status_text")

# Fields accepted by a partial update (any one of them makes a valid update)
UPDATE_FIELDS = (
    "issue_title",
    "issue_text",
    "created_by",
    "assigned_to",
    "status_text",
    "open",
    "created_on",
    "updated_on",
)

# Query parameters usable as list filters, in the order they are checked
FILTER_FIELDS = (
    "id",
    "issue_title",
    "issue_text",
    "created_on",
    "updated_on",
    "created_by",
    "assigned_to",
    "status_text",
    "open",
)

# Serialized issue keys, in response order
ISSUE_FIELDS = (
    "id",
    "issue_title",
    "issue_text",
    "created_on",
    "updated_on",
    "created_by",
    "assigned_to",
    "open",
    "status_text",
)

# Legacy clients send the identifier as "_id"
LEGACY_ID_FIELD = "_id"

# =============================================================================
# Response Messages
# =============================================================================

ERROR_REQUIRED_FIELDS_MISSING = "required field(s) missing"
ERROR_MISSING_ID = "missing id"
ERROR_NO_UPDATE_FIELDS = "no update field(s) sent"
ERROR_COULD_NOT_UPDATE = "could not update"
ERROR_COULD_NOT_DELETE = "could not delete"

RESULT_UPDATED = "successfully updated"
RESULT_DELETED = "successfully deleted"

# Accepted spellings for boolean values sent as text
TRUE_STRINGS = frozenset({"true"})
FALSE_STRINGS = frozenset({"false"})
