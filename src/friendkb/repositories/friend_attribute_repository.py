"""
Friend attribute repository.

Attributes are free-form key/value pairs, unique per (friend_id, key). `create`
refuses an existing key with DuplicateError; `upsert` overwrites it in a single
INSERT ... ON CONFLICT statement, so concurrent writers never see a half-applied
state and never produce a second row.
"""
import logging
import time
from uuid import UUID

from sqlalchemy import func, select

from friendkb.exceptions.mapper import db_error_handler
from friendkb.models.friend_attribute import FriendAttribute
from friendkb.schemas.friend_attribute import (
    FriendAttributeEntity,
    FriendAttributeCreate,
    FriendAttributeUpdate,
)
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class FriendAttributeRepository(
    BaseRepository[FriendAttributeEntity, FriendAttributeCreate, FriendAttributeUpdate]
):
    model = FriendAttribute
    entity = FriendAttributeEntity

    async def list_by_friend(self, friend_id: UUID) -> list[FriendAttributeEntity]:
        """All attributes of a friend, ordered by key."""
        stmt = (
            select(FriendAttribute)
            .where(FriendAttribute.friend_id == friend_id)
            .order_by(FriendAttribute.key.asc())
        )
        return await self._fetch_all(stmt, "list_by_friend")

    async def find_by_friend_and_key(self, friend_id: UUID, key: str) -> FriendAttributeEntity | None:
        stmt = select(FriendAttribute).where(
            FriendAttribute.friend_id == friend_id,
            FriendAttribute.key == key,
        )
        return await self._fetch_one(stmt, "find_by_friend_and_key")

    async def upsert(self, data: FriendAttributeCreate) -> FriendAttributeEntity:
        """
        Insert the attribute, or overwrite value and value_type if the friend already
        has this key. The row keeps its id and created_at; updated_at moves forward.

        Raises:
            ForeignKeyViolationError: the friend does not exist
        """
        logger.debug(
            "repo.upsert.start",
            extra={"model": self.model_name, "operation": "upsert", "key": data.key},
        )
        start = time.perf_counter()

        insert = self._dialect_insert()
        stmt = insert(FriendAttribute).values(**data.model_dump())
        stmt = stmt.on_conflict_do_update(
            index_elements=[FriendAttribute.friend_id, FriendAttribute.key],
            set_={
                "value": stmt.excluded["value"],
                "value_type": stmt.excluded["value_type"],
                "updated_at": func.now(),
            },
        ).returning(FriendAttribute)

        async with db_error_handler(self.model_name, "upsert"):
            async with self.ctx.session() as session:
                row = (
                    await session.scalars(stmt, execution_options={"populate_existing": True})
                ).one()
                entity = self._to_entity(row)

        self._log_success("upsert", start, id=str(entity.id))
        return entity
