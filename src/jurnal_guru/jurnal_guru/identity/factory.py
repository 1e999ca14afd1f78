from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..accounts.repository import AccountRepository
from ..auth_codes.service import AuthCodeService
from ..core.enums import IdentityPolicyKind
from .auth_code_policy import AuthCodePolicy
from .base import TeacherIdentityPolicy
from .employee_number_policy import EmployeeNumberPolicy


@dataclass
class IdentityPolicyFactory:
    """Factory Pattern: pick the deployment's teacher identity policy."""

    def build(
        self,
        kind: IdentityPolicyKind | str,
        *,
        accounts: AccountRepository,
        auth_codes: Optional[AuthCodeService] = None,
    ) -> TeacherIdentityPolicy:
        kind = IdentityPolicyKind(kind)
        if kind == IdentityPolicyKind.AUTH_CODE:
            if auth_codes is None:
                raise ValueError("auth_code policy needs an AuthCodeService")
            return AuthCodePolicy(auth_codes)
        return EmployeeNumberPolicy(accounts)
