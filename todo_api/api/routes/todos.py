"""Todo Routes — thin HTTP mapping over TodoOwnershipEngine.

Invariants:
    - Every route requires authentication
    - Routes never filter or mutate todos themselves; the engine scopes by owner
    - Path ids are passed through raw: the engine maps malformed ids to 404
"""

from fastapi import APIRouter, Depends

from todo_api.api.dependencies import get_current_user, get_todo_engine
from todo_api.models.user import User
from todo_api.schemas.todo import (
    TodoCreate, TodoEnvelope, TodoList, TodoResponse, TodoUpdate,
)
from todo_api.services.todo_ownership import TodoOwnershipEngine

router = APIRouter(prefix="/todos", tags=["todos"])


@router.post("", response_model=TodoResponse)
async def create_todo(
    body: TodoCreate,
    user: User = Depends(get_current_user),
    engine: TodoOwnershipEngine = Depends(get_todo_engine),
):
    todo = await engine.create(user, body.text)
    return TodoResponse.model_validate(todo)


@router.get("", response_model=TodoList)
async def list_todos(
    user: User = Depends(get_current_user),
    engine: TodoOwnershipEngine = Depends(get_todo_engine),
):
    todos = await engine.list_owned(user)
    return TodoList(todos=[TodoResponse.model_validate(t) for t in todos])


@router.get("/{todo_id}", response_model=TodoEnvelope)
async def get_todo(
    todo_id: str,
    user: User = Depends(get_current_user),
    engine: TodoOwnershipEngine = Depends(get_todo_engine),
):
    todo = await engine.get_owned(user, todo_id)
    return TodoEnvelope(todo=TodoResponse.model_validate(todo))


@router.delete("/{todo_id}", response_model=TodoEnvelope)
async def delete_todo(
    todo_id: str,
    user: User = Depends(get_current_user),
    engine: TodoOwnershipEngine = Depends(get_todo_engine),
):
    todo = await engine.delete_owned(user, todo_id)
    return TodoEnvelope(todo=TodoResponse.model_validate(todo))


@router.patch("/{todo_id}", response_model=TodoEnvelope)
async def update_todo(
    todo_id: str,
    body: TodoUpdate,
    user: User = Depends(get_current_user),
    engine: TodoOwnershipEngine = Depends(get_todo_engine),
):
    todo = await engine.update_owned(
        user, todo_id, body.model_dump(exclude_unset=True),
    )
    return TodoEnvelope(todo=TodoResponse.model_validate(todo))
