"""User Schemas — Pydantic models for signup/login bodies and user responses.

Invariants:
    - UserResponse never carries password_hash or tokens
    - Email shape and password policy are checked by the credential store,
      so their errors carry the store's codes (VALIDATION_ERROR per field)
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserCredentials(BaseModel):
    """Signup and login body."""
    email: str = Field(max_length=320)
    password: str = Field(max_length=256)


class UserResponse(BaseModel):
    """Public user data."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
