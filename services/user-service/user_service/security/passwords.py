"""Password hashing backed by bcrypt.

bcrypt salts every hash, so hashing the same plaintext twice yields two
different strings that both verify. Only the first 72 bytes of a password
take part in the hash.
"""

from __future__ import annotations

import bcrypt

DEFAULT_ROUNDS = 10


class PasswordHasher:
    """Hash and verify passwords at a fixed bcrypt work factor."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(_encode(password), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Return ``True`` when *password* matches *password_hash*.

        ``bcrypt.checkpw`` compares in constant time. A stored value that is
        not a bcrypt hash simply fails verification.
        """
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except (ValueError, TypeError):
            return False


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:72]
