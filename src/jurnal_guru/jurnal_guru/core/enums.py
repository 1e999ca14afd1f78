from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Peran pengguna (role) untuk registrasi dan otorisasi."""

    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"


REGISTRABLE_ROLES = (Role.STUDENT, Role.TEACHER)


class IdentityPolicyKind(str, Enum):
    """How a teacher proves who they are at signup (chosen per deployment)."""

    AUTH_CODE = "auth_code"
    EMPLOYEE_NUMBER = "nip"


class PasswordRequirement(str, Enum):
    UPPER = "upper"
    LOWER = "lower"
    DIGIT = "digit"
    SPECIAL = "special"
