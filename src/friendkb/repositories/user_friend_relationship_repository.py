import logging
from uuid import UUID

from sqlalchemy import select

from friendkb.models.user_friend_relationship import UserFriendRelationship
from friendkb.schemas.user_friend_relationship import (
    UserFriendRelationshipEntity,
    UserFriendRelationshipCreate,
    UserFriendRelationshipUpdate,
)
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class UserFriendRelationshipRepository(
    BaseRepository[UserFriendRelationshipEntity, UserFriendRelationshipCreate, UserFriendRelationshipUpdate]
):
    """How the user knows each friend. A friend can carry several labels."""

    model = UserFriendRelationship
    entity = UserFriendRelationshipEntity

    async def list_by_friend(self, friend_id: UUID) -> list[UserFriendRelationshipEntity]:
        stmt = (
            select(UserFriendRelationship)
            .where(UserFriendRelationship.friend_id == friend_id)
            .order_by(UserFriendRelationship.relationship_type.asc(), UserFriendRelationship.id.asc())
        )
        return await self._fetch_all(stmt, "list_by_friend")

    async def find_by_friend_and_type(
        self, friend_id: UUID, relationship_type: str
    ) -> UserFriendRelationshipEntity | None:
        """Earliest matching row when the same label was recorded more than once."""
        stmt = (
            select(UserFriendRelationship)
            .where(
                UserFriendRelationship.friend_id == friend_id,
                UserFriendRelationship.relationship_type == relationship_type,
            )
            .order_by(UserFriendRelationship.created_at.asc(), UserFriendRelationship.id.asc())
        )
        return await self._fetch_one(stmt, "find_by_friend_and_type")
