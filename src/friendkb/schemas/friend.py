from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel


class FriendEntity(BaseModel):
    """A stored friend row."""

    id: UUID
    user_id: UUID
    first_name: str
    last_name: str | None = None
    date_of_birth: date | None = None
    likes: str | None = None
    dislikes: str | None = None
    notes: str | None = None
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class FriendCreate(BaseModel):
    user_id: UUID
    first_name: str
    last_name: str | None = None
    date_of_birth: date | None = None
    likes: str | None = None
    dislikes: str | None = None
    notes: str | None = None


class FriendUpdate(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    date_of_birth: date | None = None
    likes: str | None = None
    dislikes: str | None = None
    notes: str | None = None
