from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import REGISTERED_USERS_KEY
from ..core.exceptions import DuplicateTeacherIdentifierError, DuplicateUsernameError
from ..storage.json_store import JsonDocumentStore
from .model import Account
from .repository import AccountRepository


class JsonAccountRepository(AccountRepository):
    def __init__(self, store: JsonDocumentStore, *, enforce_unique_identifier: bool = False):
        self._store = store
        self.enforce_unique_identifier = enforce_unique_identifier

    def list_all(self) -> Sequence[Account]:
        return [Account.from_record(r) for r in self._store.read_table(REGISTERED_USERS_KEY)]

    def get_by_username(self, username: str) -> Optional[Account]:
        for account in self.list_all():
            if account.username == username:
                return account
        return None

    def get_by_id(self, account_id: str) -> Optional[Account]:
        for account in self.list_all():
            if account.id == str(account_id):
                return account
        return None

    def get_by_teacher_identifier(self, identifier: str) -> Optional[Account]:
        if not identifier:
            return None
        for account in self.list_all():
            if account.teacher_identifier == identifier:
                return account
        return None

    def append(self, account: Account) -> None:
        with self._store.transaction() as doc:
            rows = doc.setdefault(REGISTERED_USERS_KEY, [])
            existing = [Account.from_record(r) for r in rows]
            if any(a.username == account.username for a in existing):
                raise DuplicateUsernameError(account.username)
            if (
                self.enforce_unique_identifier
                and account.teacher_identifier
                and any(a.teacher_identifier == account.teacher_identifier for a in existing)
            ):
                raise DuplicateTeacherIdentifierError()
            rows.append(account.to_record())
