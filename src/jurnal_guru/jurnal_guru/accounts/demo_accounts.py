"""Pre-provisioned demo accounts.

INSECURE BY DESIGN: these carry plaintext passwords and are compared directly,
outside the hashing path. They exist for classroom demos only and are switched
off with ``ENABLE_DEMO_ACCOUNTS=0``. Do not copy this comparison anywhere else.
"""
from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..core.enums import Role
from .model import AccountView

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DemoAccount:
    username: str
    plaintext_password: str
    role: Role
    full_name: str
    email: str = ""

    def to_view(self) -> AccountView:
        return AccountView(
            id=None,
            username=self.username,
            full_name=self.full_name,
            role=self.role,
            email=self.email,
        )


DEFAULT_DEMO_ACCOUNTS: tuple[DemoAccount, ...] = (
    DemoAccount("admin", "admin123", Role.ADMIN, "Administrator", "admin@sekolah.com"),
    DemoAccount("riyan", "guru123", Role.TEACHER, "Riyan Setiawan, S.Kom.", "riyan@sekolah.com"),
    DemoAccount("siti", "guru456", Role.TEACHER, "Siti Nurhaliza", "siti@sekolah.com"),
)


class DemoAccountDirectory:
    """Read-only lookup over an injected set of demo accounts."""

    def __init__(self, accounts: Sequence[DemoAccount] = DEFAULT_DEMO_ACCOUNTS):
        self._by_username = {a.username: a for a in accounts}

    def authenticate_insecure(self, username: str, password: str) -> Optional[AccountView]:
        account = self._by_username.get(username)
        if account is None:
            return None
        if not hmac.compare_digest(account.plaintext_password.encode("utf-8"), (password or "").encode("utf-8")):
            return None
        logger.warning("Demo account %r logged in with a plaintext password", username)
        return account.to_view()
