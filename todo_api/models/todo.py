"""Todo ORM — a task owned by exactly one user for its whole lifetime.

Invariants:
    - owner_id is set on creation and never reassigned
    - text is non-empty (enforced by core/completion.validate_text before insert)
    - completed_at (epoch millis) is NULL iff completed is false — also a CHECK constraint
    - Deletion is a hard delete
    - seq is assigned by the database on insert and only grows: listing by seq
      returns todos in insertion order

Design Decisions:
    - seq is the primary key (autoincrement on every backend, INTEGER rowid on
      SQLite); id is the public UUID that routes and owners see
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    BigInteger, Boolean, CheckConstraint, DateTime, ForeignKey, Integer, Text,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from todo_api.db.base import Base


class Todo(Base):
    """Todo entity."""
    __tablename__ = "todos"
    __table_args__ = (
        CheckConstraint(
            "(completed AND completed_at IS NOT NULL) "
            "OR (NOT completed AND completed_at IS NULL)",
            name="ck_todos_completion_consistent",
        ),
    )

    seq: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True, autoincrement=True,
    )
    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, unique=True, index=True,
        default=uuid.uuid4,
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    completed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    completed_at: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def snapshot(self) -> dict:
        """Plain copy of the current field values."""
        return {
            "id": self.id,
            "owner_id": self.owner_id,
            "text": self.text,
            "completed": self.completed,
            "completed_at": self.completed_at,
        }
