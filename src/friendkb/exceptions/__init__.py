from .base import (
    ErrorKind,
    RepositoryError,
    NotFoundError,
    DuplicateError,
    ForeignKeyViolationError,
    DatabaseError,
    SerializationError,
)
from .classifier import classify_error, extract_vendor_code
from .mapper import db_error_handler

__all__ = [
    "ErrorKind",
    "RepositoryError",
    "NotFoundError",
    "DuplicateError",
    "ForeignKeyViolationError",
    "DatabaseError",
    "SerializationError",
    "classify_error",
    "extract_vendor_code",
    "db_error_handler",
]
