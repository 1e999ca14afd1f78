from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.exceptions import DuplicateCodeError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AuthCode
from .repository import AuthCodeRepository

_COLUMNS = "code, used, issued_by, issued_at, used_by_account_id, used_at"


def _row_to_code(row: dict) -> AuthCode:
    return AuthCode(
        code=row["code"],
        issued_by=row["issued_by"],
        issued_at=row["issued_at"],
        used=bool(row.get("used")),
        used_by_account_id=row.get("used_by_account_id"),
        used_at=row.get("used_at"),
    )


class MySQLAuthCodeRepository(AuthCodeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[AuthCode]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM auth_codes ORDER BY seq")
            return [_row_to_code(r) for r in fetchall(cur)]

    def get(self, code: str) -> Optional[AuthCode]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM auth_codes WHERE code=%s", (code,))
            row = fetchone(cur)
            return _row_to_code(row) if row else None

    def add(self, entry: AuthCode) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"INSERT INTO auth_codes({_COLUMNS}) VALUES(%s,%s,%s,%s,%s,%s)",
                    (
                        entry.code,
                        int(entry.used),
                        entry.issued_by,
                        entry.issued_at,
                        entry.used_by_account_id,
                        entry.used_at,
                    ),
                )
        except IntegrityError as exc:
            if is_duplicate_key(exc, "uq_auth_codes_code"):
                raise DuplicateCodeError(entry.code) from exc
            raise

    def mark_used(self, code: str, *, account_id: str, used_at: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            # used=0 guard: the transition happens at most once, even under races
            cur.execute(
                """
                UPDATE auth_codes
                SET used=1, used_by_account_id=%s, used_at=%s
                WHERE code=%s AND used=0
                """,
                (account_id, used_at, code),
            )
            return cur.rowcount > 0
