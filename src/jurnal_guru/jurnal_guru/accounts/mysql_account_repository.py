from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import Role
from ..core.exceptions import DuplicateTeacherIdentifierError, DuplicateUsernameError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Account
from .repository import AccountRepository

_COLUMNS = """
    account_id, username, password_digest, full_name, email, role,
    student_id, teacher_identifier, subject, taught_class, created_at
"""


def _row_to_account(row: dict) -> Account:
    return Account(
        id=row["account_id"],
        username=row["username"],
        password_digest=row["password_digest"],
        full_name=row["full_name"],
        role=Role(row["role"]),
        created_at=row["created_at"],
        email=row.get("email") or "",
        student_id=row.get("student_id") or "",
        teacher_identifier=row.get("teacher_identifier") or "",
        subject=row.get("subject") or "",
        taught_class=row.get("taught_class") or "",
    )


class MySQLAccountRepository(AccountRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, enforce_unique_identifier: bool = False):
        self._conn_factory = conn_factory
        self.enforce_unique_identifier = enforce_unique_identifier

    def list_all(self) -> Sequence[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM registered_users ORDER BY seq")
            return [_row_to_account(r) for r in fetchall(cur)]

    def _get_one(self, where: str, value: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM registered_users WHERE {where}=%s", (value,))
            row = fetchone(cur)
            return _row_to_account(row) if row else None

    def get_by_username(self, username: str) -> Optional[Account]:
        return self._get_one("username", username)

    def get_by_id(self, account_id: str) -> Optional[Account]:
        return self._get_one("account_id", str(account_id))

    def get_by_teacher_identifier(self, identifier: str) -> Optional[Account]:
        if not identifier:
            return None
        return self._get_one("teacher_identifier", identifier)

    def append(self, account: Account) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                if self.enforce_unique_identifier and account.teacher_identifier:
                    cur.execute(
                        "INSERT INTO teacher_identifiers(teacher_identifier, account_id) VALUES(%s,%s)",
                        (account.teacher_identifier, account.id),
                    )
                cur.execute(
                    f"""
                    INSERT INTO registered_users({_COLUMNS})
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        account.id,
                        account.username,
                        account.password_digest,
                        account.full_name,
                        account.email,
                        account.role.value,
                        account.student_id,
                        account.teacher_identifier,
                        account.subject,
                        account.taught_class,
                        account.created_at,
                    ),
                )
        except IntegrityError as exc:
            if is_duplicate_key(exc, "uq_registered_users_username"):
                raise DuplicateUsernameError(account.username) from exc
            if is_duplicate_key(exc, "PRIMARY"):
                raise DuplicateTeacherIdentifierError() from exc
            raise
