from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import now_utc, to_iso
from ..common.validators import (
    check_password_strength,
    is_valid_email,
    is_valid_subject,
    is_valid_username,
)
from ..core.enums import REGISTRABLE_ROLES, Role
from ..core.exceptions import (
    AuthenticationError,
    DuplicateUsernameError,
    InvalidEmailError,
    InvalidSubjectError,
    InvalidUsernameError,
    MissingFieldError,
    ValidationError,
    WeakPasswordError,
)
from ..identity.base import TeacherIdentityPolicy
from ..security.hashing import PasswordHasher
from .demo_accounts import DemoAccountDirectory
from .model import Account, AccountView
from .repository import AccountRepository

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True)
class RegistrationInput:
    """Raw signup form. Strings are taken as typed; the service normalizes them."""

    username: str
    password: str
    full_name: str
    role: Role | str
    email: str = ""
    student_id: str = ""
    teacher_identifier: str = ""
    subject: str = ""
    taught_class: str = ""

    @classmethod
    def from_form(cls, data: Mapping[str, Any]) -> "RegistrationInput":
        """Build from a submitted form/JSON body.

        Accepts the field names of the journal's signup page as aliases
        (nisn, nip / authCode, mapelMengajar, kelasMengajar).
        """

        def pick(*keys: str) -> str:
            for key in keys:
                if data.get(key) not in (None, ""):
                    return _text(data.get(key))
            return ""

        return cls(
            username=pick("username"),
            password=pick("password"),
            full_name=pick("fullName", "full_name"),
            role=pick("role"),
            email=pick("email"),
            student_id=pick("studentId", "student_id", "nisn"),
            teacher_identifier=pick("teacherIdentifier", "teacher_identifier", "nip", "authCode"),
            subject=pick("subject", "mapelMengajar"),
            taught_class=pick("taughtClass", "taught_class", "kelasMengajar"),
        )


class RegistrationService:
    """Use case: self-service signup for students and teachers."""

    def __init__(
        self,
        accounts: AccountRepository,
        hasher: PasswordHasher,
        identity_policy: TeacherIdentityPolicy,
    ):
        self._accounts = accounts
        self._hasher = hasher
        self._identity = identity_policy

    @staticmethod
    def _parse_role(value: Role | str) -> Role:
        try:
            role = Role(value)
        except ValueError:
            role = None
        if role not in REGISTRABLE_ROLES:
            raise ValidationError("Peran tidak valid (pilih siswa atau guru)")
        return role

    def register(self, form: RegistrationInput, *, now: datetime | None = None) -> str:
        """Validate, hash and store a new account; returns its id.

        Checks run in a fixed order and the first failure is raised. Nothing
        is written before every check has passed.
        """
        username = _text(form.username).strip()
        password = _text(form.password)
        full_name = _text(form.full_name).strip()
        role_value = form.role.value if isinstance(form.role, Role) else _text(form.role).strip()

        missing = [
            name
            for name, value in (
                ("username", username),
                ("password", password),
                ("fullName", full_name),
                ("role", role_value),
            )
            if not value
        ]
        if missing:
            raise MissingFieldError(missing)
        role = self._parse_role(role_value)

        if not is_valid_username(username):
            raise InvalidUsernameError()

        strength = check_password_strength(password)
        if not strength.strong:
            raise WeakPasswordError(strength.missing)

        if self._accounts.get_by_username(username):
            raise DuplicateUsernameError(username)

        email = _text(form.email).strip()
        student_id = ""
        identifier = subject = taught_class = ""
        if role == Role.TEACHER:
            identifier = _text(form.teacher_identifier).strip()
            self._identity.validate_format(identifier)
            self._identity.ensure_available(identifier)

            if not is_valid_email(email):
                raise InvalidEmailError()

            subject = _text(form.subject)
            if not is_valid_subject(subject):
                raise InvalidSubjectError()

            taught_class = _text(form.taught_class).strip()
        else:
            student_id = _text(form.student_id).strip()

        account = Account(
            id=uuid.uuid4().hex,
            username=username,
            password_digest=self._hasher.hash(password),
            full_name=full_name,
            role=role,
            created_at=to_iso(now or now_utc()),
            email=email,
            student_id=student_id,
            teacher_identifier=identifier,
            subject=subject,
            taught_class=taught_class,
        )
        self._accounts.append(account)
        logger.info("Registered %s account %r (%s)", role.value, username, account.id)

        if role == Role.TEACHER:
            self._identity.after_registration(identifier, account.id)
        return account.id


class AuthService:
    """Use case: check a username/password pair against the registry."""

    def __init__(self, accounts: AccountRepository, hasher: PasswordHasher):
        self._accounts = accounts
        self._hasher = hasher

    def authenticate(self, username: str, password: str) -> Optional[AccountView]:
        # Unknown user and wrong password both give None; callers cannot tell them apart.
        account = self._accounts.get_by_username(username)
        if account is None:
            return None
        if not self._hasher.verify(password, account.password_digest):
            return None
        return account.to_view()

    def username_exists(self, username: str) -> bool:
        return self._accounts.get_by_username(username) is not None

    def get_account(self, account_id: str) -> Optional[AccountView]:
        account = self._accounts.get_by_id(account_id)
        return account.to_view() if account else None


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    id: Optional[str]
    username: str
    full_name: str
    role: Role
    email: str
    login_time: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "fullName": self.full_name,
            "role": self.role.value,
            "email": self.email,
            "loginTime": self.login_time,
        }


class SessionService:
    """Use case: login (registered accounts first, then demo accounts)."""

    def __init__(self, auth: AuthService, demo_accounts: Optional[DemoAccountDirectory] = None):
        self._auth = auth
        self._demo = demo_accounts

    def login(self, username: str, password: str, *, now: datetime | None = None) -> SessionUser:
        username = _text(username).strip()
        password = _text(password)
        if not username or not password:
            raise ValidationError("Nama pengguna dan kata sandi harus diisi")

        view = self._auth.authenticate(username, password)
        # demo accounts only cover usernames the registry does not know
        if view is None and self._demo is not None and not self._auth.username_exists(username):
            view = self._demo.authenticate_insecure(username, password)
        if view is None:
            raise AuthenticationError("Nama pengguna atau kata sandi salah")

        return SessionUser(
            id=view.id,
            username=view.username,
            full_name=view.full_name,
            role=view.role,
            email=view.email,
            login_time=to_iso(now or now_utc()),
        )
