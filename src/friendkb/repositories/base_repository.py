"""
Repository contract and the shared implementation of it.

`Repository` fixes the four operations every entity repository offers (find by id,
create, partial update, delete) over three type parameters: the stored entity, the
create input and the update input. `BaseRepository` implements them once over a
SQLAlchemy model plus a pydantic entity schema; concrete repositories only pick the
types and add their own queries.

Every operation runs in its own short session (see `RepositoryContext.session`): it
commits on success, rolls back on failure, and surfaces exactly one classified
`RepositoryError`. Nothing is retried.
"""
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import Select, delete, select, update
from sqlalchemy.dialects import postgresql, sqlite

from friendkb.database.base import Base
from friendkb.database.context import RepositoryContext
from friendkb.exceptions.base import DatabaseError, NotFoundError
from friendkb.exceptions.mapper import db_error_handler

# Type variables for the entity, create-input and update-input shapes
EntityT = TypeVar("EntityT", bound=BaseModel)
CreateT = TypeVar("CreateT", bound=BaseModel)
UpdateT = TypeVar("UpdateT", bound=BaseModel)

logger = logging.getLogger(__name__)


class Repository(ABC, Generic[EntityT, CreateT, UpdateT]):
    """The operations every entity repository must provide."""

    @abstractmethod
    async def find_by_id(self, entity_id: UUID) -> EntityT | None:
        """Return the entity, or None when no row has this id. Absence is not an error."""

    @abstractmethod
    async def create(self, data: CreateT) -> EntityT:
        """Insert a row and return it as stored (generated id and timestamps included)."""

    @abstractmethod
    async def update(self, entity_id: UUID, data: UpdateT) -> EntityT:
        """Overwrite the fields present in `data`; raise NotFoundError if the row is missing."""

    @abstractmethod
    async def delete(self, entity_id: UUID) -> bool:
        """Remove the row; False when there was nothing to remove."""


class BaseRepository(Repository[EntityT, CreateT, UpdateT]):
    """
    Generic SQLAlchemy implementation of `Repository`.

    Subclasses set two class attributes:
        model:  the ORM class (e.g. Friend)
        entity: the pydantic entity returned to callers (e.g. FriendEntity)
    """

    model: type[Base]
    entity: type[EntityT]

    def __init__(self, ctx: RepositoryContext):
        """
        Args:
            ctx: shared connection context. Repositories never own the pool; pass
                 `ctx.clone()` freely.
        """
        self.ctx = ctx

    @property
    def model_name(self) -> str:
        return self.model.__name__

    # =================================================================================================================
    # Helpers
    # =================================================================================================================

    def _to_entity(self, row: Any) -> EntityT:
        return self.entity.model_validate(row)

    def _log_success(self, operation: str, start: float, **extra: Any) -> None:
        duration_ms = int((time.perf_counter() - start) * 1000)
        logger.info(
            "repo.%s.success", operation,
            extra={"model": self.model_name, "operation": operation, "duration_ms": duration_ms, **extra},
        )

    async def _fetch_one(self, stmt: Select, operation: str) -> EntityT | None:
        """Run a SELECT expected to match at most one row (or take the first by its ORDER BY)."""
        async with db_error_handler(self.model_name, operation):
            async with self.ctx.session() as session:
                row = (await session.scalars(stmt.limit(1))).first()
                return self._to_entity(row) if row is not None else None

    async def _fetch_all(self, stmt: Select, operation: str) -> list[EntityT]:
        async with db_error_handler(self.model_name, operation):
            async with self.ctx.session() as session:
                rows: Sequence[Any] = (await session.scalars(stmt)).all()
                entities = [self._to_entity(row) for row in rows]

        logger.debug(
            "repo.%s.fetched", operation,
            extra={"model": self.model_name, "operation": operation, "count": len(entities)},
        )
        return entities

    def _dialect_insert(self):
        """
        `insert()` construct of the active dialect. Only these expose ON CONFLICT.
        """
        dialect = self.ctx.dialect_name
        if dialect == "postgresql":
            return postgresql.insert
        if dialect == "sqlite":
            return sqlite.insert
        raise DatabaseError(f"INSERT ... ON CONFLICT is not supported on dialect {dialect!r}")

    # =================================================================================================================
    # Create
    # =================================================================================================================

    async def create(self, data: CreateT) -> EntityT:
        """
        Insert a new row. Logging:
        - DEBUG: start event with model name and provided keys (not values).
        - INFO: success event with created id and duration_ms.

        Raises:
            DuplicateError: a unique constraint rejected the row
            ForeignKeyViolationError: a referenced row does not exist
            DatabaseError: anything else went wrong in the store
        """
        values = data.model_dump()
        logger.debug(
            "repo.create.start",
            extra={
                "model": self.model_name,
                "operation": "create",
                # keys only: values may be sensitive (password_hash)
                "provided_keys": sorted(values),
            },
        )
        start = time.perf_counter()

        async with db_error_handler(self.model_name, "create"):
            async with self.ctx.session() as session:
                row = self.model(**values)
                session.add(row)
                # flush sends the INSERT so constraint errors surface here;
                # refresh loads server-generated timestamps
                await session.flush()
                await session.refresh(row)
                entity = self._to_entity(row)

        self._log_success("create", start, id=str(entity.id))
        return entity

    # =================================================================================================================
    # Read
    # =================================================================================================================

    async def find_by_id(self, entity_id: UUID) -> EntityT | None:
        entity = await self._fetch_one(
            select(self.model).where(self.model.id == entity_id), "find_by_id"
        )
        logger.debug(
            "repo.find_by_id.%s", "hit" if entity is not None else "miss",
            extra={"model": self.model_name, "operation": "find_by_id", "id": str(entity_id)},
        )
        return entity

    async def find_by_id_or_raise(self, entity_id: UUID) -> EntityT:
        """
        Like `find_by_id`, but a missing row is an error.

        Raises:
            NotFoundError: no row has this id
        """
        entity = await self.find_by_id(entity_id)
        if entity is None:
            logger.info(
                "repo.find_by_id.not_found",
                extra={"model": self.model_name, "operation": "find_by_id", "id": str(entity_id)},
            )
            raise NotFoundError(f"{self.model_name} with ID {entity_id} not found")
        return entity

    async def exists(self, entity_id: UUID) -> bool:
        async with db_error_handler(self.model_name, "exists"):
            async with self.ctx.session() as session:
                found = await session.scalar(select(self.model.id).where(self.model.id == entity_id))
        return found is not None

    # =================================================================================================================
    # Update
    # =================================================================================================================

    async def update(self, entity_id: UUID, data: UpdateT) -> EntityT:
        """
        Merge-by-presence partial update.

        Only fields that were set and are not None are written; everything else keeps
        its stored value. A None therefore means "leave alone", so a nullable column
        cannot be cleared through this method. An input with nothing to write does not
        touch the row at all (updated_at included) and returns it as stored.

        Raises:
            NotFoundError: no row has this id
            DuplicateError: the new values collide with a unique constraint
        """
        values = data.model_dump(exclude_unset=True, exclude_none=True)
        if not values:
            logger.debug(
                "repo.update.noop",
                extra={"model": self.model_name, "operation": "update", "id": str(entity_id)},
            )
            return await self.find_by_id_or_raise(entity_id)

        logger.debug(
            "repo.update.start",
            extra={
                "model": self.model_name,
                "operation": "update",
                "id": str(entity_id),
                "provided_keys": sorted(values),
            },
        )
        start = time.perf_counter()

        # updated_at is bumped by the column's onupdate=func.now()
        stmt = (
            update(self.model)
            .where(self.model.id == entity_id)
            .values(**values)
            .returning(self.model)
        )

        async with db_error_handler(self.model_name, "update"):
            async with self.ctx.session() as session:
                row = (await session.scalars(stmt)).one_or_none()
                entity = self._to_entity(row) if row is not None else None

        if entity is None:
            logger.info(
                "repo.update.not_found",
                extra={"model": self.model_name, "operation": "update", "id": str(entity_id)},
            )
            raise NotFoundError(f"{self.model_name} with ID {entity_id} not found")

        self._log_success("update", start, id=str(entity_id))
        return entity

    # =================================================================================================================
    # Delete
    # =================================================================================================================

    async def delete(self, entity_id: UUID) -> bool:
        """
        Delete a row by id. Returns True if a row was removed, False if none existed.
        Dependent rows go with it through the ON DELETE CASCADE foreign keys.
        """
        start = time.perf_counter()
        stmt = delete(self.model).where(self.model.id == entity_id)

        async with db_error_handler(self.model_name, "delete"):
            async with self.ctx.session() as session:
                result = await session.execute(stmt)
                deleted = result.rowcount > 0

        if not deleted:
            logger.debug(
                "repo.delete.missing",
                extra={"model": self.model_name, "operation": "delete", "id": str(entity_id)},
            )
            return False

        self._log_success("delete", start, id=str(entity_id))
        return True
