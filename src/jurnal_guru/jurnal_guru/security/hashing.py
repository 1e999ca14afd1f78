"""Password hashing.

Two hashers share one small interface so the rest of the code never touches a
hash algorithm directly:

- ``Sha256PasswordHasher``: unsalted SHA-256 hex digest. Deterministic, and the
  format the journal app has always stored, so existing accounts keep working.
- ``WerkzeugPasswordHasher``: salted hashes from ``werkzeug.security``. Not
  deterministic (every call yields a new salt), ``verify`` is what counts.
"""
from __future__ import annotations

import hashlib
import hmac
from typing import Protocol

from werkzeug.security import check_password_hash, generate_password_hash


class PasswordHasher(Protocol):
    name: str

    def hash(self, secret: str) -> str:
        raise NotImplementedError

    def verify(self, secret: str, digest: str) -> bool:
        raise NotImplementedError


class Sha256PasswordHasher:
    name = "sha256"

    def hash(self, secret: str) -> str:
        return hashlib.sha256(secret.encode("utf-8")).hexdigest()

    def verify(self, secret: str, digest: str) -> bool:
        if not isinstance(secret, str) or not isinstance(digest, str):
            return False
        return hmac.compare_digest(self.hash(secret).encode("utf-8"), digest.encode("utf-8"))


class WerkzeugPasswordHasher:
    name = "werkzeug"

    def __init__(self, method: str = "scrypt"):
        self._method = method

    def hash(self, secret: str) -> str:
        return generate_password_hash(secret, method=self._method)

    def verify(self, secret: str, digest: str) -> bool:
        try:
            return check_password_hash(digest, secret)
        except (AttributeError, TypeError, ValueError):
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            return False


def build_hasher(name: str) -> PasswordHasher:
    key = (name or "sha256").strip().lower()
    if key == Sha256PasswordHasher.name:
        return Sha256PasswordHasher()
    if key == WerkzeugPasswordHasher.name:
        return WerkzeugPasswordHasher()
    raise ValueError(f"Unknown password hasher: {name!r}")
