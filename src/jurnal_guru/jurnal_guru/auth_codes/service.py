from __future__ import annotations

import logging
import secrets
import string
from datetime import datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import now_utc, to_iso
from ..common.validators import is_valid_auth_code
from ..core.constants import AUTH_CODE_MIN_LENGTH, GENERATED_AUTH_CODE_LENGTH
from ..core.enums import Role
from ..core.exceptions import (
    AuthorizationError,
    CodeAlreadyUsedError,
    CodeNotFoundError,
    InvalidTeacherIdentifierError,
)
from .model import AuthCode
from .repository import AuthCodeRepository

logger = logging.getLogger(__name__)

_CODE_ALPHABET = string.ascii_uppercase + string.digits


def _clean(code: Any) -> str:
    return "" if code is None else str(code).strip()


class AuthCodeService:
    """Use case: issue and redeem one-time teacher registration codes."""

    def __init__(self, codes: AuthCodeRepository):
        self._codes = codes

    @staticmethod
    def generate_code(length: int = GENERATED_AUTH_CODE_LENGTH) -> str:
        return "".join(secrets.choice(_CODE_ALPHABET) for _ in range(length))

    def issue(self, code: Any, issued_by: str, *, now: datetime | None = None) -> AuthCode:
        """Create a new unused code. A missing `code` gets a random one.

        Raises:
            InvalidTeacherIdentifierError: code shorter than the minimum length.
            DuplicateCodeError: the code was issued before (used or not).
        """
        code = _clean(code) or self.generate_code()
        if not is_valid_auth_code(code):
            raise InvalidTeacherIdentifierError(
                f"Kode autentikasi minimal {AUTH_CODE_MIN_LENGTH} karakter"
            )

        entry = AuthCode(code=code, issued_by=issued_by, issued_at=to_iso(now or now_utc()))
        self._codes.add(entry)
        logger.info("Issued auth code %s (by %s)", code, issued_by)
        return entry

    def issue_as(self, *, current_role: Role, issued_by: str, code: Any = None) -> AuthCode:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Anda tidak memiliki akses")
        return self.issue(code, issued_by)

    def is_redeemable(self, code: str) -> bool:
        entry = self._codes.get(_clean(code))
        return entry is not None and not entry.used

    def redeem(self, code: str, account_id: str, *, now: datetime | None = None) -> AuthCode:
        code = _clean(code)
        entry = self._codes.get(code)
        if entry is None:
            raise CodeNotFoundError(code)

        used_at = to_iso(now or now_utc())
        if not self._codes.mark_used(code, account_id=account_id, used_at=used_at):
            raise CodeAlreadyUsedError(code)

        logger.info("Auth code %s redeemed by account %s", code, account_id)
        return AuthCode(
            code=entry.code,
            issued_by=entry.issued_by,
            issued_at=entry.issued_at,
            used=True,
            used_by_account_id=account_id,
            used_at=used_at,
        )

    def list_codes(self, *, used: Optional[bool] = None) -> Sequence[AuthCode]:
        items = self._codes.list_all()
        if used is None:
            return list(items)
        return [c for c in items if c.used == used]
