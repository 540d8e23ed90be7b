"""
Custom exceptions for repository operations.

Every repository call either returns a value (or `None` for absence) or raises
exactly one of the classes below. The set is closed: callers can match on the
class or on `error_code` without knowing which database produced the failure.
"""

from enum import Enum
from typing import Iterable


class ErrorKind(str, Enum):
    """Canonical short codes, one per failure category."""
    NOT_FOUND = "not_found"
    DUPLICATE = "duplicate"
    FOREIGN_KEY_VIOLATION = "foreign_key_violation"
    DATABASE = "database"
    SERIALIZATION = "serialization"


# canonical repository-level exception

class RepositoryError(Exception):
    """
    Base exception for repository errors.

    - message: human-friendly message
    - detail: the vendor/driver message the error was built from, if any
    - fields: optional list of column names related to the error (e.g., ['email'])
    - constraint: optional DB constraint name (for logs only)
    - original: the lower-level exception that caused this one, if any
    - error_code: the `ErrorKind` of this class
    """

    kind: ErrorKind = ErrorKind.DATABASE

    def __init__(self, message: str, *, detail: str | None = None,
                 fields: Iterable[str] | None = None, constraint: str | None = None,
                 original: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.detail = detail
        self.fields = list(fields) if fields else None
        self.constraint = constraint
        self.original = original

    @property
    def error_code(self) -> ErrorKind:
        return self.kind

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.constraint:
            parts.append(f"constraint: {self.constraint}")
        parts.append(f"code: {self.kind.value}")
        return f"{base} ({'; '.join(parts)})"

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable summary of the error.

            {
                "detail": "A human-friendly message",
                "code": "duplicate",
                "fields": ["email"],   # only when known
            }

        The constraint name and the original exception are left out; they belong in
        logs, not in anything shown to an end user.
        """
        payload = {"detail": self.message, "code": self.kind.value}
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload


class NotFoundError(RepositoryError):
    """A lookup or update that expected exactly one row found none."""
    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = "Not found", **kwargs):
        super().__init__(message, **kwargs)


class DuplicateError(RepositoryError):
    """A write collided with a unique constraint."""
    kind = ErrorKind.DUPLICATE


class ForeignKeyViolationError(RepositoryError):
    """A write referenced a row that does not exist."""
    kind = ErrorKind.FOREIGN_KEY_VIOLATION


class DatabaseError(RepositoryError):
    """Any other store failure: connectivity, pool timeout, syntax, unknown codes."""
    kind = ErrorKind.DATABASE


class SerializationError(RepositoryError):
    """A row or structured value could not be decoded into its entity shape."""
    kind = ErrorKind.SERIALIZATION


__all__ = [
    "ErrorKind",
    "RepositoryError",
    "NotFoundError",
    "DuplicateError",
    "ForeignKeyViolationError",
    "DatabaseError",
    "SerializationError",
]
