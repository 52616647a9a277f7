from __future__ import annotations

from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from appupdate.services._shared.ports import PasswordHasher


@dataclass(frozen=True, slots=True)
class WerkzeugPasswordHasher(PasswordHasher):
    """
    Salted password hashing via :mod:`werkzeug.security`.

    :param method: Werkzeug hash method string (e.g. ``"scrypt"`` or
        ``"pbkdf2:sha256:600000"``).
    """

    method: str = "scrypt"

    def hash(self, plaintext: str) -> str:
        return generate_password_hash(plaintext, method=self.method)

    def verify(self, plaintext: str, password_hash: str) -> bool:
        if not password_hash:
            return False
        try:
            # ``check_password_hash`` is untyped; coerce to bool.
            return bool(check_password_hash(password_hash, plaintext))
        except ValueError:
            # Unknown or malformed hash format
            return False
