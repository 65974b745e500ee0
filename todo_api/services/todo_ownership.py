"""Todo Ownership Engine — owner-scoped todo CRUD with the completion invariant.

Invariants:
    - Every query is filtered by owner_id == requester.id
    - Malformed id, missing todo, and another user's todo all raise TodoNotFoundError
    - completed_at is set/cleared only through core/completion (pure rules)
    - update_owned reads the row FOR UPDATE and writes it in the same transaction

Design Decisions:
    - Clock injected (epoch millis) so tests can pin mutation times
    - Business rules live in core/completion; this class only does IO around them
"""

import logging
import time
from typing import Callable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.core.completion import plan_update, validate_text
from todo_api.core.domain_types import EpochMillis, parse_todo_id
from todo_api.core.errors import TodoNotFoundError
from todo_api.core.repository_protocols import UserLike
from todo_api.models.todo import Todo

logger = logging.getLogger(__name__)

Clock = Callable[[], EpochMillis]


def epoch_millis() -> EpochMillis:
    return EpochMillis(int(time.time() * 1000))


class TodoOwnershipEngine:
    """Todo operations, each scoped to the authenticated requester."""

    def __init__(self, db: AsyncSession, clock: Clock = epoch_millis):
        self.db = db
        self.clock = clock

    async def create(self, owner: UserLike, text: object) -> Todo:
        todo = Todo(
            owner_id=owner.id,
            text=validate_text(text),
            completed=False,
            completed_at=None,
        )
        self.db.add(todo)
        await self.db.commit()
        logger.info("Todo created", extra={"user_id": owner.id, "todo_id": todo.id})
        return todo

    async def list_owned(self, owner: UserLike) -> list[Todo]:
        """Owner's todos in insertion order."""
        result = await self.db.execute(
            select(Todo)
            .where(Todo.owner_id == owner.id)
            .order_by(Todo.seq),
        )
        return list(result.scalars().all())

    async def get_owned(self, owner: UserLike, raw_id: str) -> Todo:
        return await self._load_owned(owner, raw_id)

    async def delete_owned(self, owner: UserLike, raw_id: str) -> Todo:
        """Hard-delete and return the record as it was before deletion."""
        todo = await self._load_owned(owner, raw_id, for_update=True)
        await self.db.delete(todo)
        await self.db.commit()
        logger.info("Todo deleted", extra={"user_id": owner.id, "todo_id": todo.id})
        return todo

    async def update_owned(
        self, owner: UserLike, raw_id: str, patch: dict,
    ) -> Todo:
        """Apply {text?, completed?}. Other keys are ignored."""
        todo = await self._load_owned(owner, raw_id, for_update=True)
        changes = plan_update(todo.snapshot(), patch, self.clock())
        todo.text = changes["text"]
        todo.completed = changes["completed"]
        todo.completed_at = changes["completed_at"]
        await self.db.commit()
        return todo

    async def _load_owned(
        self, owner: UserLike, raw_id: str, for_update: bool = False,
    ) -> Todo:
        todo_id = parse_todo_id(raw_id)
        if todo_id is None:
            raise TodoNotFoundError()

        query = (
            select(Todo)
            .where(Todo.id == todo_id)
            .where(Todo.owner_id == owner.id)
        )
        if for_update:
            query = query.with_for_update().execution_options(
                populate_existing=True,
            )
        result = await self.db.execute(query)
        todo = result.scalar_one_or_none()
        if todo is None:
            raise TodoNotFoundError()
        return todo
