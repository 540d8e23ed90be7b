import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError

from .base import RepositoryError, DatabaseError
from .classifier import classify_error

logger = logging.getLogger(__name__)


# -----------------------
# Async context manager to DRY error handling in repositories
# -----------------------
@asynccontextmanager
async def db_error_handler(model_name: str | None = None, operation: str | None = None):
    """
    Usage:
        async with db_error_handler(self.model.__name__, "create"):
            async with self.ctx.session() as session:
                ... DB ops ...

    RepositoryError raised inside the block passes through unchanged. Store-level
    exceptions are classified and re-raised with the original chained. Rolling back
    is the session's job; this handler only translates.
    """
    try:
        yield
    except RepositoryError:
        raise
    except (SQLAlchemyError, OSError, ValueError, TypeError) as exc:
        mapped = classify_error(exc)
        context = {"model": model_name, "operation": operation, "error_code": mapped.kind.value}
        if isinstance(mapped, DatabaseError):
            # Unexpected failures keep their stack trace for diagnostics.
            logger.error("repo.%s.failed", operation, extra=context, exc_info=exc)
        else:
            logger.info("repo.%s.rejected", operation, extra=context)
        raise mapped from exc
