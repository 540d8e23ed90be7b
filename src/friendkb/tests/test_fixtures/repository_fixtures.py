"""Fixtures for repository tests."""

import uuid
from datetime import datetime

import pytest
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncEngine

from friendkb.database.context import RepositoryContext
from friendkb.repositories import (
    UserRepository,
    FriendRepository,
    GroupRepository,
    FriendAttributeRepository,
    FriendRelationshipRepository,
    UserFriendRelationshipRepository,
)
from friendkb.schemas import (
    UserCreate,
    UserEntity,
    FriendCreate,
    FriendEntity,
    GroupCreate,
    GroupEntity,
)


@pytest.fixture
def repo_ctx(async_engine: AsyncEngine) -> RepositoryContext:
    """
    Context over the per-test engine. The engine fixture disposes the pool, so the
    context is not disposed here.
    """
    return RepositoryContext(async_engine)


@pytest.fixture
def user_repository(repo_ctx: RepositoryContext) -> UserRepository:
    return UserRepository(repo_ctx)


@pytest.fixture
def friend_repository(repo_ctx: RepositoryContext) -> FriendRepository:
    return FriendRepository(repo_ctx.clone())


@pytest.fixture
def group_repository(repo_ctx: RepositoryContext) -> GroupRepository:
    return GroupRepository(repo_ctx.clone())


@pytest.fixture
def friend_attribute_repository(repo_ctx: RepositoryContext) -> FriendAttributeRepository:
    return FriendAttributeRepository(repo_ctx.clone())


@pytest.fixture
def friend_relationship_repository(repo_ctx: RepositoryContext) -> FriendRelationshipRepository:
    return FriendRelationshipRepository(repo_ctx.clone())


@pytest.fixture
def user_friend_relationship_repository(repo_ctx: RepositoryContext) -> UserFriendRelationshipRepository:
    return UserFriendRelationshipRepository(repo_ctx.clone())


@pytest.fixture
def sample_user_data() -> dict[str, str]:
    """
    Deterministic user payload. Kept synchronous because it does not touch the DB.
    """
    return {
        "first_name": "Test",
        "last_name": "User",
        "email": "testuser@example.com",
        "password_hash": "$argon2id$v=19$m=65536,t=3,p=4$c2FsdA$aGFzaA",
    }


@pytest.fixture
def create_user(user_repository: UserRepository):
    """
    Factory: `user = await create_user(email="bob@example.com")`.
    Unset fields get unique defaults.
    """
    async def _create(**overrides) -> UserEntity:
        data = {
            "first_name": "User",
            "last_name": uuid.uuid4().hex[:8],
            "email": f"user_{uuid.uuid4().hex[:8]}@example.com",
            "password_hash": "hash",
        }
        data.update(overrides)
        return await user_repository.create(UserCreate(**data))

    return _create


@pytest.fixture
async def created_user(create_user) -> UserEntity:
    return await create_user()


@pytest.fixture
def create_friend(friend_repository: FriendRepository, created_user: UserEntity):
    """Factory for friends owned by `created_user` unless `user_id` is given."""
    async def _create(**overrides) -> FriendEntity:
        data = {"user_id": created_user.id, "first_name": "Friend"}
        data.update(overrides)
        return await friend_repository.create(FriendCreate(**data))

    return _create


@pytest.fixture
def create_group(group_repository: GroupRepository, created_user: UserEntity):
    async def _create(**overrides) -> GroupEntity:
        data = {"user_id": created_user.id, "name": "Group"}
        data.update(overrides)
        return await group_repository.create(GroupCreate(**data))

    return _create


@pytest.fixture
def set_created_at(repo_ctx: RepositoryContext):
    """
    Backdate a row's created_at. Store timestamps can tie within one second, so
    ordering tests pin them explicitly.
    """
    async def _set(model, entity_id: uuid.UUID, created_at: datetime) -> None:
        async with repo_ctx.session() as session:
            await session.execute(
                update(model).where(model.id == entity_id).values(created_at=created_at)
            )

    return _set
