import logging
from uuid import UUID

from sqlalchemy import select

from friendkb.exceptions.mapper import db_error_handler
from friendkb.models.friend import Friend
from friendkb.models.group import Group, friend_groups
from friendkb.schemas.friend import FriendEntity
from friendkb.schemas.group import GroupEntity, GroupCreate, GroupUpdate
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class GroupRepository(BaseRepository[GroupEntity, GroupCreate, GroupUpdate]):
    """
    Repository for Group rows.

    Membership is written through FriendRepository.add_to_group / remove_from_group;
    this repository only reads it from the group side.
    """

    model = Group
    entity = GroupEntity

    async def list_by_user(self, user_id: UUID) -> list[GroupEntity]:
        stmt = (
            select(Group)
            .where(Group.user_id == user_id)
            .order_by(Group.name.asc(), Group.id.asc())
        )
        return await self._fetch_all(stmt, "list_by_user")

    async def list_friends(self, group_id: UUID) -> list[FriendEntity]:
        """Members of the group, ordered by first name."""
        stmt = (
            select(Friend)
            .join(friend_groups, friend_groups.c.friend_id == Friend.id)
            .where(friend_groups.c.group_id == group_id)
            .order_by(Friend.first_name.asc(), Friend.id.asc())
        )

        async with db_error_handler(self.model_name, "list_friends"):
            async with self.ctx.session() as session:
                rows = (await session.scalars(stmt)).all()
                return [FriendEntity.model_validate(row) for row in rows]
