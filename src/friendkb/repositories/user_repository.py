"""
User repository: the generic operations plus lookup by email.
"""
import logging

from sqlalchemy import select

from friendkb.models.user import User
from friendkb.schemas.user import UserEntity, UserCreate, UserUpdate
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[UserEntity, UserCreate, UserUpdate]):
    """
    Repository for User rows.

    Deleting a user removes everything the user owns (friends, groups, relationships
    and their dependents) through the database cascades.
    """

    model = User
    entity = UserEntity

    async def find_by_email(self, email: str) -> UserEntity | None:
        """
        Exact-match lookup. The email is not normalized here; callers that want
        case-insensitive login must normalize before storing and before looking up.
        """
        return await self._fetch_one(select(User).where(User.email == email), "find_by_email")
