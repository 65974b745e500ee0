"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId and TodoId wrap UUIDs — never use bare UUID in domain logic
    - EpochMillis is an integer count of milliseconds since the Unix epoch
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
TodoId = NewType("TodoId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

EpochMillis = NewType("EpochMillis", int)


# ─── Enums ───────────────────────────────────────────────────────

class TokenAccess(str, Enum):
    """Purpose tag bound into every issued token."""
    AUTH = "auth"


class CompletionState(str, Enum):
    """Todo completion states. Every todo starts PENDING."""
    PENDING = "pending"
    COMPLETED = "completed"


# ─── Token Claims ────────────────────────────────────────────────

@dataclass(frozen=True)
class TokenClaims:
    """Identity and purpose recovered from a verified token."""
    user_id: UserId
    access: str


def parse_todo_id(raw: str) -> TodoId | None:
    """Parse an opaque todo id. Returns None when the shape is not a UUID."""
    try:
        return TodoId(UUID(str(raw)))
    except (ValueError, AttributeError, TypeError):
        return None
