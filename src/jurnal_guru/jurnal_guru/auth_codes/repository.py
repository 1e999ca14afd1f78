from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AuthCode


class AuthCodeRepository(Protocol):
    def list_all(self) -> Sequence[AuthCode]:
        raise NotImplementedError

    def get(self, code: str) -> Optional[AuthCode]:
        raise NotImplementedError

    def add(self, entry: AuthCode) -> None:
        """Store a new entry; raises DuplicateCodeError if the code exists."""

        raise NotImplementedError

    def mark_used(self, code: str, *, account_id: str, used_at: str) -> bool:
        """Flip `used` to true. Returns False if the code is absent or already used."""

        raise NotImplementedError
