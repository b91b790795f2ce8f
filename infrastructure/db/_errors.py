"""
Helpers for interpreting PostgREST errors.
"""
from postgrest.exceptions import APIError

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"
# PostgreSQL SQLSTATE for invalid_text_representation (e.g. a malformed uuid)
INVALID_TEXT_REPRESENTATION = "22P02"


def is_unique_violation(error: APIError) -> bool:
    """Check whether a PostgREST error was raised by a unique index."""
    return getattr(error, "code", None) == UNIQUE_VIOLATION


def is_malformed_id(error: APIError) -> bool:
    """Check whether a PostgREST error was caused by an unparseable ID value."""
    return getattr(error, "code", None) == INVALID_TEXT_REPRESENTATION
