"""Authentication — resolve the acting user from a raw session token.

Invariants:
    - Every failure raises the same UnauthorizedError payload: missing token,
      bad signature, malformed token, wrong purpose, and revoked token are
      indistinguishable to the caller
    - Cryptographic verification alone never authorizes: the credential store
      must still hold the token
    - No side effects
"""

import logging

from todo_api.core.errors import TokenError, UnauthorizedError
from todo_api.core.repository_protocols import (
    CredentialLookup, TokenVerifier, UserLike,
)

logger = logging.getLogger(__name__)


async def authenticate(
    raw_token: str | None,
    store: CredentialLookup,
    token_service: TokenVerifier,
    access: str,
) -> UserLike:
    if not raw_token:
        raise UnauthorizedError()

    try:
        claims = token_service.verify(raw_token)
    except TokenError as e:
        logger.info(f"Token rejected: {type(e).__name__}")
        raise UnauthorizedError()

    if claims.access != access:
        logger.info(
            "Token rejected: access mismatch", extra={"user_id": claims.user_id},
        )
        raise UnauthorizedError()

    user = await store.find_by_claims(claims, raw_token, access)
    if user is None:
        logger.info(
            "Token rejected: not active", extra={"user_id": claims.user_id},
        )
        raise UnauthorizedError()
    return user
