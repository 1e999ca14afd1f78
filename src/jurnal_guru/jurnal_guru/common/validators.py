from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping

from ..core.constants import (
    AUTH_CODE_MIN_LENGTH,
    EMAIL_PATTERN,
    NIP_PATTERN,
    PASSWORD_SPECIAL_CHARACTERS,
    USERNAME_PATTERN,
    VALID_SUBJECTS,
)
from ..core.enums import PasswordRequirement

_USERNAME_RE = re.compile(USERNAME_PATTERN)
_EMAIL_RE = re.compile(EMAIL_PATTERN)
_NIP_RE = re.compile(NIP_PATTERN, re.ASCII)


def is_valid_username(value: str) -> bool:
    # fullmatch: `$` alone would accept a trailing newline
    return bool(value) and _USERNAME_RE.fullmatch(value) is not None


@dataclass(frozen=True)
class PasswordStrength:
    """Result of a strength check; `satisfied` tells which classes were found."""

    satisfied: Mapping[PasswordRequirement, bool]

    @property
    def strong(self) -> bool:
        return all(self.satisfied.values())

    @property
    def missing(self) -> tuple[PasswordRequirement, ...]:
        return tuple(req for req in PasswordRequirement if not self.satisfied[req])


def check_password_strength(value: str) -> PasswordStrength:
    value = value or ""
    return PasswordStrength(
        satisfied={
            PasswordRequirement.UPPER: any("A" <= ch <= "Z" for ch in value),
            PasswordRequirement.LOWER: any("a" <= ch <= "z" for ch in value),
            PasswordRequirement.DIGIT: any("0" <= ch <= "9" for ch in value),
            PasswordRequirement.SPECIAL: any(ch in PASSWORD_SPECIAL_CHARACTERS for ch in value),
        }
    )


def is_valid_email(value: str) -> bool:
    return bool(value) and _EMAIL_RE.fullmatch(value) is not None


def is_valid_subject(value: str) -> bool:
    return value in VALID_SUBJECTS


def is_valid_auth_code(value: str) -> bool:
    return len((value or "").strip()) >= AUTH_CODE_MIN_LENGTH


def is_valid_nip(value: str) -> bool:
    return bool(value) and _NIP_RE.fullmatch(value) is not None
