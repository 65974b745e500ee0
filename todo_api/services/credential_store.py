"""Credential Store — users, salted password hashes, and active session tokens.

Invariants:
    - Email shape and password policy are validated before any hashing
    - A token authenticates only if it verifies cryptographically AND the claimed
      user still holds that exact {access, token} pair (instant revocation)
    - remove_token is idempotent
    - Plaintext passwords and raw tokens are never logged

Design Decisions:
    - Store is request-scoped: built per request around the request's AsyncSession
    - Duplicate email detected by a pre-check and, for races, by the unique index
    - Unknown-email logins still pay for one bcrypt check (burn_check)
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.core.domain_types import TokenClaims
from todo_api.core.errors import (
    DuplicateEmailError, InvalidCredentialsError, TokenError,
)
from todo_api.core.validate_credentials import (
    DEFAULT_MIN_PASSWORD_LENGTH,
    normalize_email,
    validate_email_shape,
    validate_password_strength,
)
from todo_api.infrastructure.password_hasher import PasswordHasher
from todo_api.infrastructure.token_service import TokenService
from todo_api.models.todo import Todo
from todo_api.models.user import User
from todo_api.models.user_token import UserToken

logger = logging.getLogger(__name__)


class CredentialStore:
    """User and session-token persistence."""

    def __init__(
        self,
        db: AsyncSession,
        hasher: PasswordHasher,
        token_service: TokenService,
        min_password_length: int = DEFAULT_MIN_PASSWORD_LENGTH,
    ):
        self.db = db
        self.hasher = hasher
        self.token_service = token_service
        self.min_password_length = min_password_length

    # ─── Users ──────────────────────────────────────────────────

    async def create_user(self, email: str, password: str) -> User:
        """Validate, hash, and insert a new user."""
        normalized = validate_email_shape(email)
        validate_password_strength(password, self.min_password_length)

        if await self.get_by_email(normalized) is not None:
            raise DuplicateEmailError()

        password_hash = await self.hasher.hash_async(password)
        user = User(email=normalized, password_hash=password_hash, tokens=[])
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateEmailError()

        logger.info("User created", extra={"user_id": user.id})
        return user

    async def get_by_id(self, user_id) -> User | None:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.email == normalize_email(email)),
        )
        return result.scalar_one_or_none()

    async def verify_password(self, user: User, password: str) -> bool:
        return await self.hasher.check_async(password, user.password_hash)

    async def find_by_credentials(self, email: str, password: str) -> User:
        """Login lookup. Unknown email and wrong password raise the same error."""
        user = await self.get_by_email(email)
        if user is None:
            await self.hasher.burn_check(password)
            raise InvalidCredentialsError()
        if not await self.verify_password(user, password):
            logger.info("Login rejected", extra={"user_id": user.id})
            raise InvalidCredentialsError()
        return user

    async def delete_user(self, user: User) -> None:
        """Destroy the account, its tokens, and its todos."""
        await self.db.execute(delete(Todo).where(Todo.owner_id == user.id))
        await self.db.delete(user)
        await self.db.commit()
        logger.info("User deleted", extra={"user_id": user.id})

    # ─── Tokens ─────────────────────────────────────────────────

    async def add_token(self, user: User, access: str, token: str) -> None:
        user.tokens.append(UserToken(access=access, token=token))
        await self.db.commit()

    async def remove_token(self, user: User, token: str) -> None:
        """Revoke a token. Removing a token the user does not hold is a no-op."""
        await self.db.execute(
            delete(UserToken)
            .where(UserToken.user_id == user.id)
            .where(UserToken.token == token),
        )
        await self.db.commit()
        await self.db.refresh(user, ["tokens"])

    async def generate_auth_token(self, user: User, access: str) -> str:
        """Issue a token for user and record it as an active session."""
        token = self.token_service.issue(user.id, access)
        await self.add_token(user, access, token)
        return token

    async def find_by_claims(
        self, claims: TokenClaims, token: str, access: str,
    ) -> User | None:
        """Return the claimed user only if it still holds {access, token}."""
        if claims.access != access:
            return None
        result = await self.db.execute(
            select(User)
            .join(UserToken, UserToken.user_id == User.id)
            .where(User.id == claims.user_id)
            .where(UserToken.token == token)
            .where(UserToken.access == access),
        )
        return result.scalar_one_or_none()

    async def find_by_token(self, token: str, access: str) -> User | None:
        try:
            claims = self.token_service.verify(token)
        except TokenError:
            return None
        return await self.find_by_claims(claims, token, access)
