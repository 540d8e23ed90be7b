from sqlalchemy import Text, DateTime, ForeignKey, UUID
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func
from datetime import datetime
from friendkb.database.base import Base
import uuid


class FriendRelationship(Base):
    """
    SQLAlchemy model for how two of a user's friends know each other.

    Storage is directional: `a_to_b` reads "A is <label> of B". `b_to_a` is the
    reverse label; NULL means the relationship is symmetric. Lookups by a pair of
    friends must ignore which side was stored as A.
    """
    __tablename__ = "friend_relationships"

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

    friend_a_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("friends.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    friend_b_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("friends.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    a_to_b: Mapped[str] = mapped_column(Text, nullable=False)

    b_to_a: Mapped[str | None] = mapped_column(Text, nullable=True)

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

    def __repr__(self) -> str:
        return (
            f"<FriendRelationship(id={self.id!r}, friend_a_id={self.friend_a_id!r}, "
            f"friend_b_id={self.friend_b_id!r}, a_to_b={self.a_to_b!r})>"
        )
