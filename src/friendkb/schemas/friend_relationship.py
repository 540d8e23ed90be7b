from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, model_validator


class FriendRelationshipEntity(BaseModel):
    """
    How two friends relate. `b_to_a` is None when the label reads the same both ways.
    """

    id: UUID
    user_id: UUID
    friend_a_id: UUID
    friend_b_id: UUID
    a_to_b: str
    b_to_a: str | None = None
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class FriendRelationshipCreate(BaseModel):
    user_id: UUID
    friend_a_id: UUID
    friend_b_id: UUID
    # "A is <a_to_b> of B", e.g. "sibling of", "boss of"
    a_to_b: str
    b_to_a: str | None = None

    @model_validator(mode="after")
    def check_distinct_friends(self) -> "FriendRelationshipCreate":
        if self.friend_a_id == self.friend_b_id:
            raise ValueError("a friend cannot have a relationship with themselves")
        return self


class FriendRelationshipUpdate(BaseModel):
    a_to_b: str | None = None
    b_to_a: str | None = None
