"""
jobly.auth.passwords

Salted one-way password hashing (bcrypt).

Responsibilities:
- Hash plaintext passwords with a configurable work factor.
- Verify a plaintext against a stored digest without raising on bad digests.
"""

from __future__ import annotations

from functools import cached_property

import bcrypt

# bcrypt only looks at the first 72 bytes and newer releases reject longer input.
_BCRYPT_MAX_BYTES = 72


def _encode(plaintext: str) -> bytes:
    return plaintext.encode("utf-8")[:_BCRYPT_MAX_BYTES]


class PasswordHasher:
    def __init__(self, rounds: int = 14) -> None:
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_encode(plaintext), salt).decode("utf-8")

    def verify(self, plaintext: str, digest: str) -> bool:
        # checkpw compares in constant time; a malformed digest is just a mismatch.
        try:
            return bcrypt.checkpw(_encode(plaintext), digest.encode("utf-8"))
        except (ValueError, TypeError, AttributeError):
            return False

    @cached_property
    def decoy_digest(self) -> str:
        """Digest checked when a username is unknown, so the miss costs a full verify."""
        return self.hash("jobly-decoy-password")


# --- Module Notes -----------------------------------------------------------
# Hashing is CPU-bound; async callers run it through `asyncio.to_thread`.
