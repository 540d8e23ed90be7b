"""
Map raw store failures onto the closed `RepositoryError` taxonomy.

Classification uses the vendor error code only, never the message text:

| vendor code                                                   | kind                  |
| ------------------------------------------------------------- | --------------------- |
| `23505` (Postgres), `SQLITE_CONSTRAINT_UNIQUE`/`_PRIMARYKEY`  | Duplicate             |
| `23503` (Postgres), `SQLITE_CONSTRAINT_FOREIGNKEY`            | ForeignKeyViolation   |
| anything else, or no code                                     | Database              |

Two cases are decided before the code is looked at: `NoResultFound` is NotFound, and
pydantic/JSON decoding failures are Serialization.
"""
import json
import logging
import re
from enum import Enum

from pydantic import ValidationError
from sqlalchemy.exc import DBAPIError, NoResultFound

from .base import (
    ErrorKind,
    RepositoryError,
    NotFoundError,
    DuplicateError,
    ForeignKeyViolationError,
    DatabaseError,
    SerializationError,
)

logger = logging.getLogger(__name__)


# =================================================================================================================
# Vendor code tables
# =================================================================================================================

# https://www.postgresql.org/docs/current/errcodes-appendix.html
class PostgresErrorCodes(str, Enum):
    UNIQUE_VIOLATION = "23505"
    FOREIGN_KEY_VIOLATION = "23503"


# https://www.sqlite.org/rescode.html (extended result codes)
class SqliteErrorNames(str, Enum):
    CONSTRAINT_UNIQUE = "SQLITE_CONSTRAINT_UNIQUE"
    CONSTRAINT_PRIMARYKEY = "SQLITE_CONSTRAINT_PRIMARYKEY"
    CONSTRAINT_FOREIGNKEY = "SQLITE_CONSTRAINT_FOREIGNKEY"


VENDOR_CODE_KIND_MAP: dict[str, ErrorKind] = {
    PostgresErrorCodes.UNIQUE_VIOLATION: ErrorKind.DUPLICATE,
    PostgresErrorCodes.FOREIGN_KEY_VIOLATION: ErrorKind.FOREIGN_KEY_VIOLATION,
    SqliteErrorNames.CONSTRAINT_UNIQUE: ErrorKind.DUPLICATE,
    SqliteErrorNames.CONSTRAINT_PRIMARYKEY: ErrorKind.DUPLICATE,
    SqliteErrorNames.CONSTRAINT_FOREIGNKEY: ErrorKind.FOREIGN_KEY_VIOLATION,
}


# =================================================================================================================
# Driver diagnostics
# =================================================================================================================

def _driver_error(exc: BaseException) -> BaseException | None:
    """The DB-API exception behind a SQLAlchemy error, if there is one."""
    if isinstance(exc, DBAPIError):
        return exc.orig
    return None


def _driver_candidates(orig: BaseException) -> list:
    """The driver error itself, then the raw exception an async adapter chained under it."""
    cause = getattr(orig, "__cause__", None)
    return [orig, cause] if cause is not None else [orig]


def extract_vendor_code(exc: BaseException) -> str | None:
    """
    Return the vendor error code carried by `exc`, or None.

    Postgres drivers expose the SQLSTATE as `pgcode` (psycopg, SQLAlchemy's asyncpg
    adapter) or `sqlstate` (raw asyncpg). sqlite3 exposes the extended result name as
    `sqlite_errorname`.
    """
    orig = _driver_error(exc)
    if orig is None:
        return None

    for candidate in _driver_candidates(orig):
        for attr in ("pgcode", "sqlstate", "sqlite_errorname"):
            code = getattr(candidate, attr, None)
            if code:
                return str(code)
    return None


def _constraint_name(orig: BaseException) -> str | None:
    diag = getattr(orig, "diag", None)
    if diag is not None:
        name = getattr(diag, "constraint_name", None)
        if name:
            return name
    for candidate in _driver_candidates(orig):
        name = getattr(candidate, "constraint_name", None)
        if name:
            return name
    return None


def _vendor_detail(orig: BaseException) -> str | None:
    """Postgres puts 'Key (col)=(value) already exists.' in a separate detail field."""
    diag = getattr(orig, "diag", None)
    detail = getattr(diag, "message_detail", None) if diag is not None else None
    if detail:
        return detail
    for candidate in _driver_candidates(orig):
        detail = getattr(candidate, "detail", None)
        if isinstance(detail, str) and detail:
            return detail
    return None


# -----------------------
# Column extraction helpers
# -----------------------

def _extract_columns_postgres(msg: str) -> list[str] | None:
    """
    Try to extract involved column names from a Postgres detail message:
      - 'Key (email)=(a@b.com) already exists.'
      - 'Key (friend_id, key)=(..., nickname) already exists.'
      - 'Key (user_id)=(...) is not present in table "users".'
    """
    m = re.search(r'key \((?P<cols>[^)]+)\)=', msg, flags=re.IGNORECASE)
    if m:
        return [c.strip().strip('"') for c in m.group("cols").split(",")]
    return None


def _extract_columns_sqlite(msg: str) -> list[str] | None:
    # SQLite: 'UNIQUE constraint failed: friend_attributes.friend_id, friend_attributes.key'
    m = re.search(r'UNIQUE constraint failed: (?P<cols>.+)$', msg, flags=re.IGNORECASE)
    if m:
        return [c.split('.')[-1].strip() for c in re.split(r',\s*', m.group("cols"))]
    return None


def extract_columns(*messages: str | None) -> list[str] | None:
    """
    Best-effort extraction of column names from vendor messages (Postgres, SQLite).
    SQLite foreign-key failures do not name a column, so None is a normal result.
    """
    for msg in messages:
        if not msg:
            continue
        cols = _extract_columns_postgres(msg) or _extract_columns_sqlite(msg)
        if cols:
            return cols
    return None


# =================================================================================================================
# Classifier
# =================================================================================================================

def _is_serialization_failure(exc: BaseException) -> bool:
    return isinstance(exc, (ValidationError, json.JSONDecodeError, TypeError))


def classify_error(exc: BaseException) -> RepositoryError:
    """
    Convert any exception raised while talking to the store into a RepositoryError.

    Total: every input yields exactly one error. The input is attached as `original`;
    callers raise the result with `from exc` so the traceback keeps the chain.
    """
    if isinstance(exc, RepositoryError):
        return exc

    if isinstance(exc, NoResultFound):
        logger.debug("classifier.not_found")
        return NotFoundError("Record not found", original=exc)

    if _is_serialization_failure(exc):
        logger.debug("classifier.serialization_failure", extra={"exc_type": type(exc).__name__})
        return SerializationError(f"Failed to decode record: {exc}", detail=str(exc), original=exc)

    orig = _driver_error(exc)
    code = extract_vendor_code(exc)
    kind = VENDOR_CODE_KIND_MAP.get(code) if code else None

    if kind is None:
        message = str(orig) if orig is not None else str(exc)
        if code:
            # Unknown code: warn (noticeable) but keep raw diagnostics at DEBUG only.
            logger.warning("classifier.unknown_vendor_code", extra={"vendor_code": code})
        logger.debug("classifier.raw_diagnostic", extra={"orig_repr": repr(orig if orig is not None else exc)})
        return DatabaseError(f"Database error: {message}", detail=message, original=exc)

    vendor_message = str(orig)
    constraint = _constraint_name(orig)
    columns = extract_columns(_vendor_detail(orig), vendor_message)

    # the INFO-level rejection event is emitted by db_error_handler
    logger.debug(
        "classifier.%s", kind.value,
        extra={"vendor_code": code, "fields": columns, "constraint": constraint},
    )

    if kind is ErrorKind.DUPLICATE:
        return DuplicateError(
            f"Record already exists: {vendor_message}",
            detail=vendor_message, fields=columns, constraint=constraint, original=exc,
        )
    return ForeignKeyViolationError(
        f"Referenced record does not exist: {vendor_message}",
        detail=vendor_message, fields=columns, constraint=constraint, original=exc,
    )
