"""
Pydantic value types returned by and passed to the repositories.

Each entity kind has three shapes: `<Kind>Entity` (a stored row, built from the ORM
object with `from_attributes`), `<Kind>Create` and `<Kind>Update`. Entities compare
by value, so two loads of the same unchanged row are equal.
"""

from .user import UserEntity, UserCreate, UserUpdate
from .friend import FriendEntity, FriendCreate, FriendUpdate
from .group import GroupEntity, GroupCreate, GroupUpdate
from .friend_attribute import FriendAttributeEntity, FriendAttributeCreate, FriendAttributeUpdate
from .friend_relationship import (
    FriendRelationshipEntity,
    FriendRelationshipCreate,
    FriendRelationshipUpdate,
)
from .user_friend_relationship import (
    UserFriendRelationshipEntity,
    UserFriendRelationshipCreate,
    UserFriendRelationshipUpdate,
)

__all__ = [
    "UserEntity", "UserCreate", "UserUpdate",
    "FriendEntity", "FriendCreate", "FriendUpdate",
    "GroupEntity", "GroupCreate", "GroupUpdate",
    "FriendAttributeEntity", "FriendAttributeCreate", "FriendAttributeUpdate",
    "FriendRelationshipEntity", "FriendRelationshipCreate", "FriendRelationshipUpdate",
    "UserFriendRelationshipEntity", "UserFriendRelationshipCreate", "UserFriendRelationshipUpdate",
]
