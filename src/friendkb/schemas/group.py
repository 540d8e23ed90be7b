from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class GroupEntity(BaseModel):
    """A stored group row."""

    id: UUID
    user_id: UUID
    name: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class GroupCreate(BaseModel):
    user_id: UUID
    name: str
    description: str | None = None


class GroupUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
