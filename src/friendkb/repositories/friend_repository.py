"""
Friend repository: CRUD for friends plus group membership.

Membership lives in the `friend_groups` join table. Adding a membership is
idempotent; removing one reports whether anything was removed.
"""
import logging
import time
from uuid import UUID

from sqlalchemy import delete, select

from friendkb.exceptions.mapper import db_error_handler
from friendkb.models.friend import Friend
from friendkb.models.group import Group, friend_groups
from friendkb.schemas.friend import FriendEntity, FriendCreate, FriendUpdate
from friendkb.schemas.group import GroupEntity
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class FriendRepository(BaseRepository[FriendEntity, FriendCreate, FriendUpdate]):
    model = Friend
    entity = FriendEntity

    async def list_by_user(self, user_id: UUID) -> list[FriendEntity]:
        """All friends owned by a user, ordered by first name."""
        stmt = (
            select(Friend)
            .where(Friend.user_id == user_id)
            .order_by(Friend.first_name.asc(), Friend.id.asc())
        )
        return await self._fetch_all(stmt, "list_by_user")

    # =================================================================================================================
    # Group membership
    # =================================================================================================================

    async def add_to_group(self, friend_id: UUID, group_id: UUID) -> None:
        """
        Put a friend in a group. Adding an existing membership is a no-op.

        Raises:
            ForeignKeyViolationError: the friend or the group does not exist
        """
        start = time.perf_counter()
        insert = self._dialect_insert()
        stmt = (
            insert(friend_groups)
            .values(friend_id=friend_id, group_id=group_id)
            .on_conflict_do_nothing(index_elements=["friend_id", "group_id"])
        )

        async with db_error_handler(self.model_name, "add_to_group"):
            async with self.ctx.session() as session:
                await session.execute(stmt)

        self._log_success("add_to_group", start, id=str(friend_id), group_id=str(group_id))

    async def remove_from_group(self, friend_id: UUID, group_id: UUID) -> bool:
        """Returns False when the friend was not in the group."""
        stmt = delete(friend_groups).where(
            friend_groups.c.friend_id == friend_id,
            friend_groups.c.group_id == group_id,
        )

        async with db_error_handler(self.model_name, "remove_from_group"):
            async with self.ctx.session() as session:
                result = await session.execute(stmt)
                removed = result.rowcount > 0

        logger.debug(
            "repo.remove_from_group.%s", "removed" if removed else "missing",
            extra={"model": self.model_name, "operation": "remove_from_group",
                   "id": str(friend_id), "group_id": str(group_id)},
        )
        return removed

    async def list_groups(self, friend_id: UUID) -> list[GroupEntity]:
        """Groups the friend belongs to, ordered by group name."""
        stmt = (
            select(Group)
            .join(friend_groups, friend_groups.c.group_id == Group.id)
            .where(friend_groups.c.friend_id == friend_id)
            .order_by(Group.name.asc(), Group.id.asc())
        )

        async with db_error_handler(self.model_name, "list_groups"):
            async with self.ctx.session() as session:
                rows = (await session.scalars(stmt)).all()
                return [GroupEntity.model_validate(row) for row in rows]
