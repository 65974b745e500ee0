"""Todo Schemas — request/response models for the todo routes.

Invariants:
    - TodoUpdate accepts only text and completed; other keys are dropped
    - completed must be a real JSON boolean (StrictBool)
    - completed_at is epoch milliseconds or null

Design Decisions:
    - Empty text is rejected by the engine (core/completion.validate_text),
      not by a Field constraint, so create and update report it the same way
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, StrictBool


class TodoCreate(BaseModel):
    text: str


class TodoUpdate(BaseModel):
    """Partial update. Use model_dump(exclude_unset=True) to get the patch."""
    model_config = ConfigDict(extra="ignore")

    text: str | None = None
    completed: StrictBool | None = None


class TodoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    text: str
    completed: bool
    completed_at: int | None
    owner_id: UUID


class TodoEnvelope(BaseModel):
    todo: TodoResponse


class TodoList(BaseModel):
    todos: list[TodoResponse]
