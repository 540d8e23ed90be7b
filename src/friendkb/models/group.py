from sqlalchemy import Column, Table, String, Text, DateTime, ForeignKey, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from datetime import datetime
from friendkb.database.base import Base
import uuid
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .user import User
    from .friend import Friend


# ------------------------------
# Friend <-> Group join table
# ------------------------------
# A pure join record: the (friend_id, group_id) pair is the primary key, so a second
# insert of the same pair is a unique violation that callers can absorb with
# ON CONFLICT DO NOTHING.
friend_groups = Table(
    "friend_groups",
    Base.metadata,
    Column(
        "friend_id",
        UUID(as_uuid=True),
        ForeignKey("friends.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "group_id",
        UUID(as_uuid=True),
        ForeignKey("groups.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)


class Group(Base):
    """
    SQLAlchemy model for a Group of friends (e.g. "Work", "Family").
    """
    __tablename__ = "groups"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    description: Mapped[str | None] = mapped_column(Text, nullable=True)

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

    user: Mapped["User"] = relationship("User", back_populates="groups", lazy="raise")

    friends: Mapped[list["Friend"]] = relationship(
        "Friend",
        secondary=friend_groups,
        back_populates="groups",
        passive_deletes=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Group(id={self.id!r}, name={self.name!r}, user_id={self.user_id!r})>"
