from .base_repository import Repository, BaseRepository
from .user_repository import UserRepository
from .friend_repository import FriendRepository
from .group_repository import GroupRepository
from .friend_attribute_repository import FriendAttributeRepository
from .friend_relationship_repository import FriendRelationshipRepository
from .user_friend_relationship_repository import UserFriendRelationshipRepository

__all__ = [
    "Repository",
    "BaseRepository",
    "UserRepository",
    "FriendRepository",
    "GroupRepository",
    "FriendAttributeRepository",
    "FriendRelationshipRepository",
    "UserFriendRelationshipRepository",
]
