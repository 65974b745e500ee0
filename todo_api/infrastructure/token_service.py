"""Token Service — issues and verifies HMAC-signed session tokens (PyJWT, HS256).

Invariants:
    - A token binds {user_id, access}; verify() recovers exactly that pair
    - verify() is a pure function of token + secret — it never consults storage
    - Any change to header or payload text breaks the signature
    - Every issued token is distinct (random jti nonce)

Design Decisions:
    - Secret injected through the constructor at startup; no module-level secret
    - No exp claim: tokens live until revoked from the credential store.
      Known weakness, see DESIGN.md
"""

import logging
import secrets
import time
from uuid import UUID

import jwt

from todo_api.core.domain_types import TokenClaims, UserId
from todo_api.core.errors import TokenMalformedError, TokenSignatureError

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS: list[str] = ["_id", "access"]


class TokenService:
    """Signs and verifies session tokens with one shared secret."""

    def __init__(self, secret: str, algorithm: str = "HS256"):
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm

    def issue(self, user_id: UUID, access: str) -> str:
        payload = {
            "_id": str(user_id),
            "access": access,
            "iat": int(time.time()),
            "jti": secrets.token_hex(8),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Decode and check the signature. Raises TokenError subclasses."""
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.InvalidSignatureError:
            raise TokenSignatureError("token signature mismatch")
        except jwt.InvalidTokenError as e:
            logger.debug(f"Token rejected: {type(e).__name__}")
            raise TokenMalformedError("token could not be decoded")

        access = payload["access"]
        if not isinstance(access, str):
            raise TokenMalformedError("access claim must be a string")
        try:
            user_id = UserId(UUID(str(payload["_id"])))
        except ValueError:
            raise TokenMalformedError("_id claim is not a valid identifier")
        return TokenClaims(user_id=user_id, access=access)
