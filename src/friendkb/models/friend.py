from sqlalchemy import String, Text, Date, DateTime, ForeignKey, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from datetime import date, datetime
from friendkb.database.base import Base
import uuid
from typing import TYPE_CHECKING

from .group import friend_groups

if TYPE_CHECKING:
    from .user import User
    from .group import Group


class Friend(Base):
    """
    SQLAlchemy model for a Friend.

    Owned by exactly one user. Friends are the subject of attributes, of
    friend-to-friend relationships and of the user's own relationship labels, and
    belong to any number of groups through the `friend_groups` join table.
    """
    __tablename__ = "friends"

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

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)

    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Used for birthday reminders
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)

    likes: Mapped[str | None] = mapped_column(Text, nullable=True)

    dislikes: Mapped[str | None] = mapped_column(Text, nullable=True)

    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

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

    user: Mapped["User"] = relationship("User", back_populates="friends", lazy="raise")

    # Many-to-Many: membership rows live in friend_groups
    groups: Mapped[list["Group"]] = relationship(
        "Group",
        secondary=friend_groups,
        back_populates="friends",
        passive_deletes=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Friend(id={self.id!r}, first_name={self.first_name!r}, user_id={self.user_id!r})>"
