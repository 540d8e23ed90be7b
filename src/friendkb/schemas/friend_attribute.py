from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, field_validator

from friendkb.models.friend_attribute import DEFAULT_VALUE_TYPE


class FriendAttributeEntity(BaseModel):
    """A stored key/value attribute of a friend."""

    id: UUID
    friend_id: UUID
    key: str
    value: str
    value_type: str
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class FriendAttributeCreate(BaseModel):
    """
    Input for both `create` and `upsert`.

    `value_type` falls back to "text" when omitted or passed as None.
    """

    friend_id: UUID
    key: str
    value: str
    value_type: str = DEFAULT_VALUE_TYPE

    @field_validator("value_type", mode="before")
    @classmethod
    def default_value_type(cls, v: str | None) -> str:
        return DEFAULT_VALUE_TYPE if v is None else v


class FriendAttributeUpdate(BaseModel):
    # The key is part of the (friend_id, key) identity and cannot be changed here
    value: str | None = None
    value_type: str | None = None
