"""User Routes — signup, login, current user, logout.

Invariants:
    - Signup and login return the issued token in the auth header, never in the body
    - Response bodies never include password_hash or tokens
    - Logout revokes only the token that authenticated the request
"""

import logging

from fastapi import APIRouter, Depends, Response

from todo_api.api.dependencies import (
    AuthSession, get_credential_store, get_current_session, get_current_user,
)
from todo_api.config import Settings, get_settings
from todo_api.models.user import User
from todo_api.schemas.user import UserCredentials, UserResponse
from todo_api.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserResponse)
async def signup(
    body: UserCredentials,
    response: Response,
    store: CredentialStore = Depends(get_credential_store),
    settings: Settings = Depends(get_settings),
):
    """Create an account and start a session."""
    user = await store.create_user(body.email, body.password)
    token = await store.generate_auth_token(user, settings.token_access)
    response.headers[settings.auth_header] = token
    return UserResponse.model_validate(user)


@router.post("/login", response_model=UserResponse)
async def login(
    body: UserCredentials,
    response: Response,
    store: CredentialStore = Depends(get_credential_store),
    settings: Settings = Depends(get_settings),
):
    user = await store.find_by_credentials(body.email, body.password)
    token = await store.generate_auth_token(user, settings.token_access)
    response.headers[settings.auth_header] = token
    logger.info("User logged in", extra={"user_id": user.id})
    return UserResponse.model_validate(user)


@router.get("/me", response_model=UserResponse)
async def get_me(user: User = Depends(get_current_user)):
    return UserResponse.model_validate(user)


@router.delete("/me/token")
async def logout(
    session: AuthSession = Depends(get_current_session),
    store: CredentialStore = Depends(get_credential_store),
):
    await store.remove_token(session.user, session.token)
    logger.info("User logged out", extra={"user_id": session.user.id})
    return {"message": "Logged out"}
