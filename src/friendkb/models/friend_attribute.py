from sqlalchemy import String, Text, DateTime, ForeignKey, UniqueConstraint, UUID
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func
from datetime import datetime
from friendkb.database.base import Base
import uuid

# Type hint stored alongside every value when the caller does not give one
DEFAULT_VALUE_TYPE = "text"


class FriendAttribute(Base):
    """
    SQLAlchemy model for a free-form key/value attribute on a friend.

    The (friend_id, key) pair is unique: writing the same key twice must update the
    existing row (see FriendAttributeRepository.upsert), never add a second one.
    """
    __tablename__ = "friend_attributes"
    __table_args__ = (
        UniqueConstraint("friend_id", "key"),
    )

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

    key: Mapped[str] = mapped_column(String(255), nullable=False)

    value: Mapped[str] = mapped_column(Text, nullable=False)

    value_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=DEFAULT_VALUE_TYPE,
        server_default=DEFAULT_VALUE_TYPE,
    )

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
        return f"<FriendAttribute(id={self.id!r}, friend_id={self.friend_id!r}, key={self.key!r})>"
