from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import AUTH_CODES_KEY
from ..core.exceptions import DuplicateCodeError
from ..storage.json_store import JsonDocumentStore
from .model import AuthCode
from .repository import AuthCodeRepository


class JsonAuthCodeRepository(AuthCodeRepository):
    def __init__(self, store: JsonDocumentStore):
        self._store = store

    def list_all(self) -> Sequence[AuthCode]:
        return [AuthCode.from_record(r) for r in self._store.read_table(AUTH_CODES_KEY)]

    def get(self, code: str) -> Optional[AuthCode]:
        for entry in self.list_all():
            if entry.code == code:
                return entry
        return None

    def add(self, entry: AuthCode) -> None:
        with self._store.transaction() as doc:
            rows = doc.setdefault(AUTH_CODES_KEY, [])
            if any(r.get("code") == entry.code for r in rows):
                raise DuplicateCodeError(entry.code)
            rows.append(entry.to_record())

    def mark_used(self, code: str, *, account_id: str, used_at: str) -> bool:
        with self._store.transaction() as doc:
            for row in doc.get(AUTH_CODES_KEY) or []:
                if row.get("code") != code:
                    continue
                if row.get("used"):
                    return False
                row["used"] = True
                row["usedByAccountId"] = account_id
                row["usedAt"] = used_at
                return True
        return False
