from sqlalchemy import Text, DateTime, ForeignKey, UUID
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func
from datetime import datetime
from friendkb.database.base import Base
import uuid


class UserFriendRelationship(Base):
    """
    SQLAlchemy model for how the owning user personally knows a friend.

    A friend may carry several rows at once ("coworker" and "neighbor"); the
    (friend_id, relationship_type) pair is deliberately not a unique constraint.
    """
    __tablename__ = "user_friend_relationships"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    friend_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("friends.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    relationship_type: Mapped[str] = mapped_column(Text, nullable=False)

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
            f"<UserFriendRelationship(id={self.id!r}, friend_id={self.friend_id!r}, "
            f"relationship_type={self.relationship_type!r})>"
        )
