"""Password Hasher — bcrypt hashing with a per-hash random salt.

Invariants:
    - Identical passwords never produce identical hashes (gensalt per call)
    - Comparison happens inside bcrypt.checkpw (constant-time)
    - Async variants run bcrypt in a worker thread: the event loop never blocks on it
"""

import asyncio
import secrets

import bcrypt


class PasswordHasher:
    """Thin wrapper over bcrypt with a configurable cost factor."""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds
        self._dummy_hash: str | None = None

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def check(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"), password_hash.encode("utf-8"),
            )
        except ValueError:
            return False

    async def hash_async(self, password: str) -> str:
        return await asyncio.to_thread(self.hash, password)

    async def check_async(self, password: str, password_hash: str) -> bool:
        return await asyncio.to_thread(self.check, password, password_hash)

    async def burn_check(self, password: str) -> bool:
        """Run a full check against a throwaway hash. Always False.

        Used when the account is unknown so login timing matches a wrong password.
        """
        if self._dummy_hash is None:
            self._dummy_hash = await self.hash_async(secrets.token_urlsafe(16))
        await self.check_async(password, self._dummy_hash)
        return False
