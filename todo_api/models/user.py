"""User ORM — credential record: normalized email, bcrypt hash, active tokens.

Invariants:
    - id is UUID primary key, immutable
    - email is unique (stored normalized: stripped, lower-cased)
    - password_hash is a bcrypt hash; plaintext never stored
    - tokens are loaded eagerly (selectin) and deleted with the user

Design Decisions:
    - No relationship to todos: todos reference owner_id only, and account
      deletion removes them with an explicit bulk delete
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from todo_api.db.base import Base


class User(Base):
    """User aggregate — owns tokens and (by reference) todos."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(
        String(320), nullable=False, unique=True, index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    tokens: Mapped[list["UserToken"]] = relationship(
        "UserToken", back_populates="user",
        cascade="all, delete-orphan", lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
