"""
RepositoryContext: the one thing every repository is constructed with.

It holds a reference to the shared AsyncEngine (the pool) and the session factory
bound to it. Contexts are cheap to copy; every copy talks to the same pool.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, AsyncSession, async_sessionmaker

from friendkb.config import Settings
from friendkb.exceptions import DatabaseError
from .session import create_engine_from_settings, create_session_factory

logger = logging.getLogger(__name__)


class RepositoryContext:
    """
    Shared handle to the database pool.

    Usage:
        ctx = RepositoryContext.from_settings(get_settings())
        users = UserRepository(ctx)
        friends = FriendRepository(ctx.clone())
        ...
        await ctx.dispose()
    """

    def __init__(self, engine: AsyncEngine,
                 session_factory: async_sessionmaker[AsyncSession] | None = None):
        self.engine = engine
        self.session_factory = session_factory or create_session_factory(engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "RepositoryContext":
        engine = create_engine_from_settings(settings)
        logger.info(
            "db.context.created",
            extra={"dialect": engine.dialect.name, "pool_size": settings.DB_POOL_SIZE},
        )
        return cls(engine)

    def clone(self) -> "RepositoryContext":
        """Another context over the same engine and session factory. No new pool is opened."""
        return type(self)(self.engine, self.session_factory)

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    async def begin_transaction(self) -> AsyncConnection:
        """
        Lease a connection from the pool and begin a transaction on it.

        The caller owns the returned connection: it must `commit()` or `rollback()`
        and then `close()` it. Nothing is rolled back implicitly. The connection
        only depends on the engine, so it outlives this context object.

        Raises:
            DatabaseError: the pool timed out or the connection could not be opened.
        """
        try:
            conn = await self.engine.connect()
        except (SQLAlchemyError, OSError) as exc:
            logger.error("db.transaction.connect_failed", exc_info=exc)
            raise DatabaseError(f"Failed to acquire connection: {exc}", detail=str(exc), original=exc) from exc

        try:
            await conn.begin()
        except (SQLAlchemyError, OSError) as exc:
            await conn.close()
            logger.error("db.transaction.begin_failed", exc_info=exc)
            raise DatabaseError(f"Failed to begin transaction: {exc}", detail=str(exc), original=exc) from exc

        logger.debug("db.transaction.begun")
        return conn

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        One unit of work: commit when the block exits cleanly, roll back when it raises.
        """
        async with self.session_factory() as session:
            async with session.begin():
                yield session

    async def dispose(self) -> None:
        """Close every pooled connection. Clones share the pool, so call this once, last."""
        await self.engine.dispose()
        logger.info("db.context.disposed", extra={"dialect": self.dialect_name})
