"""
Friend relationship repository.

Rows are stored directionally (A, B) but a pair of friends is looked up without
regard to which side was stored as A.
"""
import logging
from uuid import UUID

from sqlalchemy import and_, or_, select

from friendkb.models.friend_relationship import FriendRelationship
from friendkb.schemas.friend_relationship import (
    FriendRelationshipEntity,
    FriendRelationshipCreate,
    FriendRelationshipUpdate,
)
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class FriendRelationshipRepository(
    BaseRepository[FriendRelationshipEntity, FriendRelationshipCreate, FriendRelationshipUpdate]
):
    model = FriendRelationship
    entity = FriendRelationshipEntity

    async def list_by_user(self, user_id: UUID) -> list[FriendRelationshipEntity]:
        """Newest first."""
        stmt = (
            select(FriendRelationship)
            .where(FriendRelationship.user_id == user_id)
            .order_by(FriendRelationship.created_at.desc(), FriendRelationship.id.asc())
        )
        return await self._fetch_all(stmt, "list_by_user")

    async def list_by_friend(self, friend_id: UUID) -> list[FriendRelationshipEntity]:
        """Relationships with the friend on either side, newest first."""
        stmt = (
            select(FriendRelationship)
            .where(
                or_(
                    FriendRelationship.friend_a_id == friend_id,
                    FriendRelationship.friend_b_id == friend_id,
                )
            )
            .order_by(FriendRelationship.created_at.desc(), FriendRelationship.id.asc())
        )
        return await self._fetch_all(stmt, "list_by_friend")

    async def find_between(self, friend_x: UUID, friend_y: UUID) -> FriendRelationshipEntity | None:
        """
        The relationship between two friends in either stored direction.
        If several exist, the newest one is returned.
        """
        stmt = (
            select(FriendRelationship)
            .where(
                or_(
                    and_(FriendRelationship.friend_a_id == friend_x,
                         FriendRelationship.friend_b_id == friend_y),
                    and_(FriendRelationship.friend_a_id == friend_y,
                         FriendRelationship.friend_b_id == friend_x),
                )
            )
            .order_by(FriendRelationship.created_at.desc(), FriendRelationship.id.asc())
        )
        return await self._fetch_one(stmt, "find_between")
