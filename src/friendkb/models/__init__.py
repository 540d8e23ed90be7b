"""
Centralized access to all ORM models.

Importing this package registers every table with `Base.metadata`, which is what
`create_all` (tests, local development) and the repositories rely on.

    from friendkb.models import User, Friend, Group, friend_groups
"""

from .user import User
from .group import Group, friend_groups
from .friend import Friend
from .friend_attribute import FriendAttribute, DEFAULT_VALUE_TYPE
from .friend_relationship import FriendRelationship
from .user_friend_relationship import UserFriendRelationship

__all__ = [
    "User",
    "Friend",
    "Group",
    "friend_groups",
    "FriendAttribute",
    "DEFAULT_VALUE_TYPE",
    "FriendRelationship",
    "UserFriendRelationship",
]
