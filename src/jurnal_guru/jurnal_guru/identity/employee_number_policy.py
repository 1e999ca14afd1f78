from __future__ import annotations

from ..accounts.repository import AccountRepository
from ..common.validators import is_valid_nip
from ..core.enums import IdentityPolicyKind
from ..core.exceptions import DuplicateTeacherIdentifierError, InvalidTeacherIdentifierError
from .base import TeacherIdentityPolicy


class EmployeeNumberPolicy(TeacherIdentityPolicy):
    """Teacher identifier is the 18-digit NIP, unique among accounts."""

    kind = IdentityPolicyKind.EMPLOYEE_NUMBER
    requires_unique_identifier = True

    def __init__(self, accounts: AccountRepository):
        self._accounts = accounts

    def validate_format(self, identifier: str) -> None:
        if not is_valid_nip(identifier):
            raise InvalidTeacherIdentifierError("NIP harus 18 digit angka")

    def ensure_available(self, identifier: str) -> None:
        if self._accounts.get_by_teacher_identifier(identifier):
            raise DuplicateTeacherIdentifierError()
