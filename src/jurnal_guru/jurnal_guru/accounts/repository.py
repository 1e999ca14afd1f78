from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Account


class AccountRepository(Protocol):
    """Interface repository untuk Account.

    Catatan (DIP): service bergantung pada interface ini, bukan pada storage tertentu.
    `append` must make the username check and the write atomic; when
    `enforce_unique_identifier` is set it also rejects a second account with the
    same teacher identifier.
    """

    enforce_unique_identifier: bool

    def list_all(self) -> Sequence[Account]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[Account]:
        raise NotImplementedError

    def get_by_id(self, account_id: str) -> Optional[Account]:
        raise NotImplementedError

    def get_by_teacher_identifier(self, identifier: str) -> Optional[Account]:
        raise NotImplementedError

    def append(self, account: Account) -> None:
        raise NotImplementedError
