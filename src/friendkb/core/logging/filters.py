"""
Logging filters.

CorrelationIdFilter
    Stamps `correlation_id` on every record so one logical operation (a job, a
    request handled by the caller, a test) can be followed through the repository
    and classifier logs. The id lives in a ContextVar, so it follows `await` and is
    isolated per asyncio task.

RedactFilter
    Masks record attributes whose name marks them as secret. Repositories only log
    key names, never values; this filter covers `extra={...}` passed by callers.

Both filters always return True: they annotate records, they never drop them.
"""

import contextvars
import logging
import uuid
from contextlib import contextmanager
from logging import LogRecord
from typing import Iterator

# Default None means "no correlation id set"; the filter renders that as "-".
_correlation_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "correlation_id", default=None
)


def set_correlation_id(correlation_id: str | None) -> contextvars.Token:
    """
    Set the correlation id in the current context.

    Returns:
        token: pass it to reset_correlation_id(token) to restore the previous value
    """
    return _correlation_id_ctx.set(correlation_id)


def reset_correlation_id(token: contextvars.Token) -> None:
    _correlation_id_ctx.reset(token)


def get_correlation_id() -> str | None:
    return _correlation_id_ctx.get()


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """
    Run a block under a correlation id (a fresh uuid4 hex when none is given).

        with correlation_scope() as cid:
            await friends.add_to_group(friend_id, group_id)
    """
    cid = correlation_id or uuid.uuid4().hex
    token = set_correlation_id(cid)
    try:
        yield cid
    finally:
        reset_correlation_id(token)


class CorrelationIdFilter(logging.Filter):
    """
    Guarantees every LogRecord has a `correlation_id` attribute:
    an explicit `extra={"correlation_id": ...}` wins, then the context value, then "-".
    """

    def filter(self, record: LogRecord) -> bool:
        record.correlation_id = (
            getattr(record, "correlation_id", None) or get_correlation_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    SENSITIVE = {
        "password", "password_hash", "secret", "token", "access_token",
        "refresh_token", "authorization", "database_url",
    }
    MASK = "***REDACTED***"

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = self.MASK
        return True
