"""Completion State Machine — pure rules for a todo's completed/completed_at pair.

Invariants:
    - completed_at is not None iff completed is True
    - PENDING -> COMPLETED sets completed_at to the mutation time
    - COMPLETED -> PENDING clears completed_at
    - Self-transitions are no-ops: completed_at is never touched

Design Decisions:
    - Functions are PURE: they return the new values, the shell writes them
    - The mutation time is passed in (epoch millis) so callers own the clock
"""

from typing import Any

from todo_api.core.domain_types import CompletionState, EpochMillis
from todo_api.core.errors import InputValidationError

MUTABLE_FIELDS: tuple[str, ...] = ("text", "completed")


def completion_state(completed: bool) -> CompletionState:
    return CompletionState.COMPLETED if completed else CompletionState.PENDING


def transition_completion(
    completed: bool,
    completed_at: EpochMillis | None,
    requested: bool | None,
    now: EpochMillis,
) -> tuple[bool, EpochMillis | None]:
    """Apply a requested completion value. None means "leave unchanged"."""
    if requested is None:
        return completed, completed_at

    current = completion_state(completed)
    target = completion_state(requested)
    if current == target:
        return completed, completed_at
    if target == CompletionState.COMPLETED:
        return True, now
    return False, None


def validate_text(text: Any) -> str:
    """Return stripped todo text or raise InputValidationError."""
    if not isinstance(text, str) or not text.strip():
        raise InputValidationError("text must be a non-empty string", "text")
    return text.strip()


def plan_update(
    current: dict, patch: dict, now: EpochMillis,
) -> dict:
    """Compute the field values a patch produces. Pure — no state mutation.

    current must hold text, completed and completed_at. Keys in patch other
    than text and completed are ignored. Returns the full new
    {text, completed, completed_at} triple.
    """
    picked = {k: patch[k] for k in MUTABLE_FIELDS if k in patch}

    text = current["text"]
    if "text" in picked:
        text = validate_text(picked["text"])

    requested = picked.get("completed")
    if requested is not None and not isinstance(requested, bool):
        raise InputValidationError("completed must be a boolean", "completed")

    completed, completed_at = transition_completion(
        current["completed"], current["completed_at"], requested, now,
    )
    return {"text": text, "completed": completed, "completed_at": completed_at}
