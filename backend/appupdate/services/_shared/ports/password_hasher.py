from __future__ import annotations

from typing import Protocol


class PasswordHasher(Protocol):
    """One-way password hashing and verification."""

    def hash(self, plaintext: str) -> str:
        """
        Return a salted hash of ``plaintext``.

        Fails only on catastrophic internal errors.
        """

    def verify(self, plaintext: str, password_hash: str) -> bool:
        """Return ``True`` on match; never raises on mismatch or malformed hashes."""
