import uuid
from datetime import timedelta

import pytest

from friendkb.exceptions import ForeignKeyViolationError
from friendkb.models import UserFriendRelationship
from friendkb.repositories import UserFriendRelationshipRepository
from friendkb.schemas import UserFriendRelationshipCreate, UserFriendRelationshipUpdate


@pytest.mark.asyncio
class TestUserFriendRelationshipRepository:

    async def test_friend_can_carry_several_labels(
        self, user_friend_relationship_repository: UserFriendRelationshipRepository, create_friend
    ):
        friend = await create_friend()
        for label in ("neighbor", "coworker"):
            await user_friend_relationship_repository.create(
                UserFriendRelationshipCreate(friend_id=friend.id, relationship_type=label)
            )

        labels = [r.relationship_type for r in await user_friend_relationship_repository.list_by_friend(friend.id)]
        assert labels == ["coworker", "neighbor"]

    async def test_same_label_twice_is_allowed(
        self, user_friend_relationship_repository: UserFriendRelationshipRepository, create_friend
    ):
        friend = await create_friend()
        for _ in range(2):
            await user_friend_relationship_repository.create(
                UserFriendRelationshipCreate(friend_id=friend.id, relationship_type="coworker")
            )

        assert len(await user_friend_relationship_repository.list_by_friend(friend.id)) == 2

    async def test_find_by_friend_and_type_returns_earliest(
        self, user_friend_relationship_repository: UserFriendRelationshipRepository, create_friend, set_created_at
    ):
        friend = await create_friend()
        first = await user_friend_relationship_repository.create(
            UserFriendRelationshipCreate(friend_id=friend.id, relationship_type="coworker")
        )
        second = await user_friend_relationship_repository.create(
            UserFriendRelationshipCreate(friend_id=friend.id, relationship_type="coworker")
        )
        await set_created_at(UserFriendRelationship, second.id, first.created_at - timedelta(days=1))

        found = await user_friend_relationship_repository.find_by_friend_and_type(friend.id, "coworker")
        assert found.id == second.id

    async def test_find_by_friend_and_type_missing(
        self, user_friend_relationship_repository: UserFriendRelationshipRepository, create_friend
    ):
        friend = await create_friend()
        assert await user_friend_relationship_repository.find_by_friend_and_type(friend.id, "coworker") is None

    async def test_relabel(self, user_friend_relationship_repository: UserFriendRelationshipRepository, create_friend):
        friend = await create_friend()
        rel = await user_friend_relationship_repository.create(
            UserFriendRelationshipCreate(friend_id=friend.id, relationship_type="coworker")
        )

        updated = await user_friend_relationship_repository.update(
            rel.id, UserFriendRelationshipUpdate(relationship_type="former coworker")
        )

        assert updated.relationship_type == "former coworker"
        assert updated.friend_id == friend.id

    async def test_unknown_friend_raises_fk_violation(
        self, user_friend_relationship_repository: UserFriendRelationshipRepository
    ):
        with pytest.raises(ForeignKeyViolationError):
            await user_friend_relationship_repository.create(
                UserFriendRelationshipCreate(friend_id=uuid.uuid4(), relationship_type="coworker")
            )
