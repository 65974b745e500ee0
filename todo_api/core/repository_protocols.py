"""Boundary Protocols — contracts between core and shell for authentication.

Invariants:
    - authenticate() depends on these Protocols, never on concrete classes
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, tests pass plain fakes
    - Lookup is async because implementations do IO; verification is sync
      because it is a pure function of the token and the secret
"""

from typing import Protocol
from uuid import UUID

from todo_api.core.domain_types import TokenClaims


class UserLike(Protocol):
    """Structural contract for user objects handed back by a credential lookup."""
    id: UUID
    email: str


class TokenVerifier(Protocol):
    """Contract for token verification — implemented by TokenService."""
    def verify(self, token: str) -> TokenClaims: ...


class CredentialLookup(Protocol):
    """Contract for the revocation-aware user lookup — implemented by CredentialStore."""
    async def find_by_claims(
        self, claims: TokenClaims, token: str, access: str,
    ) -> UserLike | None: ...
