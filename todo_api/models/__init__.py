"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Users own tokens (relationship) and todos (owner_id reference)

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from todo_api.models.user import User  # noqa: F401
from todo_api.models.user_token import UserToken  # noqa: F401
from todo_api.models.todo import Todo  # noqa: F401
