from __future__ import annotations

from typing import Sequence

from .constants import VALID_SUBJECTS
from .enums import PasswordRequirement


class DomainError(Exception):
    """Base exception for business rule violations."""

    kind = "DomainError"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = "ValidationError"


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    kind = "AuthenticationError"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    kind = "AuthorizationError"


class MissingFieldError(ValidationError):
    kind = "MissingField"

    def __init__(self, fields: Sequence[str]):
        self.fields = tuple(fields)
        super().__init__("Semua kolom wajib harus diisi: " + ", ".join(self.fields))


class InvalidUsernameError(ValidationError):
    kind = "InvalidUsername"

    def __init__(self) -> None:
        super().__init__(
            "Username harus 3-20 karakter, dimulai dengan huruf, hanya alfanumerik & underscore"
        )


_REQUIREMENT_LABELS = {
    PasswordRequirement.UPPER: "huruf besar",
    PasswordRequirement.LOWER: "huruf kecil",
    PasswordRequirement.DIGIT: "angka",
    PasswordRequirement.SPECIAL: "karakter khusus (!@#$%^&* dll)",
}


class WeakPasswordError(ValidationError):
    """Password is missing one or more character classes."""

    kind = "WeakPassword"

    def __init__(self, missing: Sequence[PasswordRequirement]):
        self.missing = tuple(missing)
        labels = ", ".join(_REQUIREMENT_LABELS[m] for m in self.missing)
        super().__init__(f"Password harus mengandung: {labels}")


class DuplicateUsernameError(ValidationError):
    kind = "DuplicateUsername"

    def __init__(self, username: str):
        self.username = username
        super().__init__("Username sudah terdaftar")


class InvalidTeacherIdentifierError(ValidationError):
    kind = "InvalidTeacherIdentifier"


class IdentifierNotRedeemableError(ValidationError):
    kind = "IdentifierNotRedeemable"

    def __init__(self) -> None:
        super().__init__("Kode autentikasi tidak dikenal atau sudah digunakan")


class DuplicateTeacherIdentifierError(ValidationError):
    kind = "DuplicateTeacherIdentifier"

    def __init__(self) -> None:
        super().__init__("NIP sudah terdaftar")


class InvalidEmailError(ValidationError):
    kind = "InvalidEmail"

    def __init__(self) -> None:
        super().__init__("Format email tidak valid")


class InvalidSubjectError(ValidationError):
    kind = "InvalidSubject"

    def __init__(self) -> None:
        super().__init__("Mata pelajaran tidak valid. Pilih dari: " + ", ".join(VALID_SUBJECTS))


class DuplicateCodeError(ValidationError):
    kind = "DuplicateCode"

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Kode autentikasi '{code}' sudah ada")


class CodeNotFoundError(DomainError):
    """Internal: redeem() was asked for a code that was never issued."""

    kind = "CodeNotFound"

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Auth code '{code}' not found")


class CodeAlreadyUsedError(DomainError):
    """Internal: redeem() was asked for a code that is already consumed."""

    kind = "CodeAlreadyUsed"

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Auth code '{code}' already used")
