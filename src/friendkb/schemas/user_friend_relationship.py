from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class UserFriendRelationshipEntity(BaseModel):
    """How the owning user knows a friend (e.g. "coworker", "neighbor")."""

    id: UUID
    friend_id: UUID
    relationship_type: str
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class UserFriendRelationshipCreate(BaseModel):
    friend_id: UUID
    relationship_type: str


class UserFriendRelationshipUpdate(BaseModel):
    relationship_type: str | None = None
