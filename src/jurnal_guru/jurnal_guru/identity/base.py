from __future__ import annotations

from abc import ABC, abstractmethod

from ..core.enums import IdentityPolicyKind


class TeacherIdentityPolicy(ABC):
    """Strategy Pattern: how a teacher identifier is checked at signup.

    Selected once per deployment; the registration workflow only talks to
    this interface.
    """

    kind: IdentityPolicyKind
    # True when the account registry itself must keep identifiers unique.
    requires_unique_identifier: bool = False

    @abstractmethod
    def validate_format(self, identifier: str) -> None:
        """Raise InvalidTeacherIdentifierError if the shape is wrong."""

        raise NotImplementedError

    @abstractmethod
    def ensure_available(self, identifier: str) -> None:
        """Raise if the identifier cannot be used for a new account."""

        raise NotImplementedError

    def after_registration(self, identifier: str, account_id: str) -> None:
        """Hook run once the account is stored. Must not raise."""
