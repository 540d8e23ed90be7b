"""
User entity and its create/update inputs.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class UserEntity(BaseModel):
    """A stored user row."""

    id: UUID
    first_name: str
    last_name: str
    email: str
    password_hash: str
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class UserCreate(BaseModel):
    first_name: str
    last_name: str
    email: str
    # Already hashed by the caller
    password_hash: str


class UserUpdate(BaseModel):
    """Fields left unset (or set to None) keep their stored value."""

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    password_hash: str | None = None
