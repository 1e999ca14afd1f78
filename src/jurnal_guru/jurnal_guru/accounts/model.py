from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Account:
    """Entitas domain: akun terdaftar (siswa atau guru).

    Catatan: objek data murni, tanpa akses storage. `password_digest` tidak
    pernah berisi plaintext.
    """

    id: str
    username: str
    password_digest: str
    full_name: str
    role: Role
    created_at: str
    email: str = ""
    student_id: str = ""
    teacher_identifier: str = ""
    subject: str = ""
    taught_class: str = ""

    def to_view(self) -> "AccountView":
        return AccountView(
            id=self.id,
            username=self.username,
            full_name=self.full_name,
            role=self.role,
            created_at=self.created_at,
            email=self.email,
            student_id=self.student_id,
            teacher_identifier=self.teacher_identifier,
            subject=self.subject,
            taught_class=self.taught_class,
        )

    def to_record(self) -> Dict[str, Any]:
        """JSON record as stored under `registeredUsers`."""
        return {
            "id": self.id,
            "username": self.username,
            "passwordDigest": self.password_digest,
            "fullName": self.full_name,
            "email": self.email,
            "role": self.role.value,
            "studentId": self.student_id,
            "teacherIdentifier": self.teacher_identifier,
            "subject": self.subject,
            "taughtClass": self.taught_class,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_record(cls, row: Dict[str, Any]) -> "Account":
        """Read a stored record.

        Records written by the old journal page (`passwordHash`, numeric `id`,
        `nisn`, `nip`/`authCode`, `mapelMengajar`, `kelasMengajar`) are read too.
        """

        def pick(*keys: str) -> str:
            for key in keys:
                if row.get(key) not in (None, ""):
                    return str(row[key])
            return ""

        return cls(
            id=str(row["id"]),
            username=row["username"],
            password_digest=pick("passwordDigest", "passwordHash"),
            full_name=pick("fullName"),
            role=Role(row["role"]),
            created_at=pick("createdAt"),
            email=pick("email"),
            student_id=pick("studentId", "nisn"),
            teacher_identifier=pick("teacherIdentifier", "nip", "authCode"),
            subject=pick("subject", "mapelMengajar"),
            taught_class=pick("taughtClass", "kelasMengajar"),
        )


@dataclass(frozen=True)
class AccountView:
    """Account without the password digest; safe to hand to callers."""

    id: Optional[str]
    username: str
    full_name: str
    role: Role
    created_at: str = ""
    email: str = ""
    student_id: str = ""
    teacher_identifier: str = ""
    subject: str = ""
    taught_class: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "fullName": self.full_name,
            "email": self.email,
            "role": self.role.value,
            "studentId": self.student_id,
            "teacherIdentifier": self.teacher_identifier,
            "subject": self.subject,
            "taughtClass": self.taught_class,
            "createdAt": self.created_at,
        }
