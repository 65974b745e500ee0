"""Route Dependencies — wires app.state services and the request DB session into routes.

Invariants:
    - Services built once at startup live on app.state (token service, hasher)
    - Request-scoped services (credential store, todo engine) share the request's
      AsyncSession through get_db
    - Protected routes depend on get_current_user; it raises UnauthorizedError
"""

from dataclasses import dataclass

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.config import Settings, get_settings
from todo_api.infrastructure.database import get_db
from todo_api.infrastructure.password_hasher import PasswordHasher
from todo_api.infrastructure.token_service import TokenService
from todo_api.models.user import User
from todo_api.services.authenticate import authenticate
from todo_api.services.credential_store import CredentialStore
from todo_api.services.todo_ownership import TodoOwnershipEngine


@dataclass
class AuthSession:
    """Authenticated user plus the token that authenticated the request."""
    user: User
    token: str


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_credential_store(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    token_service: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_settings),
) -> CredentialStore:
    return CredentialStore(
        db, hasher, token_service,
        min_password_length=settings.min_password_length,
    )


def get_todo_engine(db: AsyncSession = Depends(get_db)) -> TodoOwnershipEngine:
    return TodoOwnershipEngine(db)


async def get_current_session(
    request: Request,
    store: CredentialStore = Depends(get_credential_store),
    token_service: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_settings),
) -> AuthSession:
    raw_token = request.headers.get(settings.auth_header)
    user = await authenticate(
        raw_token, store, token_service, settings.token_access,
    )
    return AuthSession(user=user, token=raw_token)


async def get_current_user(
    session: AuthSession = Depends(get_current_session),
) -> User:
    return session.user
