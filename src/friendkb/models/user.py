from sqlalchemy import String, DateTime, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from datetime import datetime
from friendkb.database.base import Base
import uuid
from typing import TYPE_CHECKING

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .friend import Friend
    from .group import Group


class User(Base):
    """
    SQLAlchemy model for User.

    The root owner: every Friend and Group row hangs off a user, and deleting the
    user cascades through them (enforced by the database foreign keys).
    """
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)

    last_name: Mapped[str] = mapped_column(String(100), nullable=False)

    # Unique login identifier
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False
    )

    # Hashed by the caller; this layer never sees plain-text passwords
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=True
    )

    # --- Relationships ---
    # passive_deletes: the database cascade removes children, the ORM does not load them first
    friends: Mapped[list["Friend"]] = relationship(
        "Friend",
        back_populates="user",
        passive_deletes=True,
        lazy="raise",
    )

    groups: Mapped[list["Group"]] = relationship(
        "Group",
        back_populates="user",
        passive_deletes=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id!r}, email={self.email!r})>"
