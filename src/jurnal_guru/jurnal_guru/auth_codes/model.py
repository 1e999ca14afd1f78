from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class AuthCode:
    """Kode autentikasi guru yang diterbitkan admin; sekali pakai."""

    code: str
    issued_by: str
    issued_at: str
    used: bool = False
    used_by_account_id: Optional[str] = None
    used_at: Optional[str] = None

    def to_record(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "used": self.used,
            "issuedBy": self.issued_by,
            "issuedAt": self.issued_at,
            "usedByAccountId": self.used_by_account_id,
            "usedAt": self.used_at,
        }

    @classmethod
    def from_record(cls, row: Dict[str, Any]) -> "AuthCode":
        return cls(
            code=row["code"],
            issued_by=row.get("issuedBy") or "",
            issued_at=row.get("issuedAt") or "",
            used=bool(row.get("used", False)),
            used_by_account_id=row.get("usedByAccountId"),
            used_at=row.get("usedAt"),
        )
