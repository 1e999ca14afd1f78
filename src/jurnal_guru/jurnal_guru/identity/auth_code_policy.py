from __future__ import annotations

import logging

from ..auth_codes.service import AuthCodeService
from ..common.validators import is_valid_auth_code
from ..core.constants import AUTH_CODE_MIN_LENGTH
from ..core.enums import IdentityPolicyKind
from ..core.exceptions import IdentifierNotRedeemableError, InvalidTeacherIdentifierError
from .base import TeacherIdentityPolicy

logger = logging.getLogger(__name__)


class AuthCodePolicy(TeacherIdentityPolicy):
    """Teacher proves identity with a one-time code issued by an admin."""

    kind = IdentityPolicyKind.AUTH_CODE

    def __init__(self, auth_codes: AuthCodeService):
        self._auth_codes = auth_codes

    def validate_format(self, identifier: str) -> None:
        if not is_valid_auth_code(identifier):
            raise InvalidTeacherIdentifierError(
                f"Kode autentikasi guru wajib diisi (minimal {AUTH_CODE_MIN_LENGTH} karakter)"
            )

    def ensure_available(self, identifier: str) -> None:
        if not self._auth_codes.is_redeemable(identifier):
            raise IdentifierNotRedeemableError()

    def after_registration(self, identifier: str, account_id: str) -> None:
        # The account is already stored; a failed redemption is left for an admin.
        try:
            self._auth_codes.redeem(identifier, account_id)
        except Exception:
            logger.exception(
                "Account %s registered but auth code %s could not be marked used",
                account_id,
                identifier,
            )
