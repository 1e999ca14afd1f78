from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

import pytest

from src.jurnal_guru.jurnal_guru.accounts.model import Account
from src.jurnal_guru.jurnal_guru.accounts.service import AuthService, RegistrationInput, RegistrationService
from src.jurnal_guru.jurnal_guru.auth_codes.model import AuthCode
from src.jurnal_guru.jurnal_guru.auth_codes.service import AuthCodeService
from src.jurnal_guru.jurnal_guru.core.enums import PasswordRequirement, Role
from src.jurnal_guru.jurnal_guru.core.exceptions import (
    DuplicateCodeError,
    DuplicateTeacherIdentifierError,
    DuplicateUsernameError,
    IdentifierNotRedeemableError,
    InvalidEmailError,
    InvalidSubjectError,
    InvalidTeacherIdentifierError,
    InvalidUsernameError,
    MissingFieldError,
    ValidationError,
    WeakPasswordError,
)
from src.jurnal_guru.jurnal_guru.identity.auth_code_policy import AuthCodePolicy
from src.jurnal_guru.jurnal_guru.identity.employee_number_policy import EmployeeNumberPolicy
from src.jurnal_guru.jurnal_guru.security.hashing import Sha256PasswordHasher


class InMemoryAccounts:
    def __init__(self, *, enforce_unique_identifier: bool = False):
        self.enforce_unique_identifier = enforce_unique_identifier
        self.items: list[Account] = []

    def list_all(self):
        return list(self.items)

    def get_by_username(self, username: str) -> Optional[Account]:
        return next((a for a in self.items if a.username == username), None)

    def get_by_id(self, account_id: str) -> Optional[Account]:
        return next((a for a in self.items if a.id == account_id), None)

    def get_by_teacher_identifier(self, identifier: str) -> Optional[Account]:
        return next((a for a in self.items if identifier and a.teacher_identifier == identifier), None)

    def append(self, account: Account) -> None:
        self.items.append(account)


class InMemoryCodes:
    def __init__(self):
        self.items: dict[str, AuthCode] = {}

    def list_all(self):
        return list(self.items.values())

    def get(self, code: str) -> Optional[AuthCode]:
        return self.items.get(code)

    def add(self, entry: AuthCode) -> None:
        if entry.code in self.items:
            raise DuplicateCodeError(entry.code)
        self.items[entry.code] = entry

    def mark_used(self, code: str, *, account_id: str, used_at: str) -> bool:
        entry = self.items.get(code)
        if entry is None or entry.used:
            return False
        self.items[code] = AuthCode(
            code=entry.code,
            issued_by=entry.issued_by,
            issued_at=entry.issued_at,
            used=True,
            used_by_account_id=account_id,
            used_at=used_at,
        )
        return True


class StuckCodes(InMemoryCodes):
    """Codes look redeemable but can never be marked used."""

    def mark_used(self, code: str, *, account_id: str, used_at: str) -> bool:
        return False


class BrokenCodes(InMemoryCodes):
    """Storage fails while marking a code used."""

    def mark_used(self, code: str, *, account_id: str, used_at: str) -> bool:
        raise OSError("disk full")


NOW = datetime(2025, 1, 1, 7, 30, tzinfo=timezone.utc)


def _student(**overrides) -> RegistrationInput:
    data = dict(username="budi_01", password="Rahasia1!", full_name="Budi Santoso", role="student", student_id="0012345678")
    data.update(overrides)
    return RegistrationInput(**data)


def _teacher(identifier: str = "GURU2025", **overrides) -> RegistrationInput:
    data = dict(
        username="ibu_ani",
        password="Rahasia1!",
        full_name="Ani Wijaya, S.Pd.",
        role="teacher",
        email="ani@sekolah.sch.id",
        teacher_identifier=identifier,
        subject="Informatika",
        taught_class="X RPL 1",
    )
    data.update(overrides)
    return RegistrationInput(**data)


@pytest.fixture
def codes():
    return InMemoryCodes()


@pytest.fixture
def auth_codes(codes):
    return AuthCodeService(codes)


@pytest.fixture
def accounts():
    return InMemoryAccounts()


@pytest.fixture
def service(accounts, auth_codes):
    return RegistrationService(accounts, Sha256PasswordHasher(), AuthCodePolicy(auth_codes))


def test_registered_student_can_authenticate_and_view_has_no_digest(service, accounts):
    account_id = service.register(_student(), now=NOW)

    view = AuthService(accounts, Sha256PasswordHasher()).authenticate("budi_01", "Rahasia1!")

    assert view is not None
    assert view.id == account_id
    assert view.username == "budi_01"
    assert view.full_name == "Budi Santoso"
    assert view.role == Role.STUDENT
    assert view.student_id == "0012345678"
    assert view.created_at == "2025-01-01T07:30:00.000Z"
    assert not hasattr(view, "password_digest")
    assert "passwordDigest" not in view.to_dict()


def test_stored_digest_is_not_the_password(service, accounts):
    service.register(_student())

    stored = accounts.items[0]
    assert stored.password_digest != "Rahasia1!"
    assert Sha256PasswordHasher().verify("Rahasia1!", stored.password_digest)


def test_student_registration_drops_teacher_fields(service, accounts):
    service.register(_student(subject="Informatika", teacher_identifier="GURU2025", taught_class="X"))

    stored = accounts.items[0]
    assert (stored.subject, stored.teacher_identifier, stored.taught_class) == ("", "", "")


def test_missing_fields_are_reported_together(service, accounts):
    with pytest.raises(MissingFieldError) as exc:
        service.register(_student(username="  ", full_name=""))

    assert exc.value.fields == ("username", "fullName")
    assert exc.value.kind == "MissingField"
    assert accounts.items == []


@pytest.mark.parametrize("role", ["admin", "kepala_sekolah"])
def test_role_must_be_student_or_teacher(service, role):
    with pytest.raises(ValidationError):
        service.register(_student(role=role))


def test_invalid_username_is_rejected(service):
    with pytest.raises(InvalidUsernameError):
        service.register(_student(username="1budi"))


def test_weak_password_lists_unmet_requirements(service, accounts):
    with pytest.raises(WeakPasswordError) as exc:
        service.register(_student(password="Abcdef1"))

    assert exc.value.missing == (PasswordRequirement.SPECIAL,)
    assert "karakter khusus" in str(exc.value)
    assert accounts.items == []


def test_username_check_comes_before_password_check(service):
    with pytest.raises(InvalidUsernameError):
        service.register(_student(username="ab", password="lemah"))


def test_duplicate_username_keeps_single_account(service, accounts):
    service.register(_student())

    with pytest.raises(DuplicateUsernameError):
        service.register(_student(full_name="Budi Lain"))

    assert [a.username for a in accounts.items] == ["budi_01"]


def test_username_is_trimmed_and_case_sensitive(service, accounts):
    service.register(_student(username="  budi_01 "))
    service.register(_student(username="Budi_01"))

    assert [a.username for a in accounts.items] == ["budi_01", "Budi_01"]


def test_teacher_subject_outside_whitelist_fails(service, auth_codes):
    auth_codes.issue("GURU2025", "admin")

    with pytest.raises(InvalidSubjectError):
        service.register(_teacher(subject="Olahraga"))


def test_teacher_with_listed_subject_succeeds(service, auth_codes, accounts):
    auth_codes.issue("GURU2025", "admin")

    account_id = service.register(_teacher(subject="Informatika"), now=NOW)

    stored = accounts.get_by_id(account_id)
    assert stored.role == Role.TEACHER
    assert stored.subject == "Informatika"
    assert stored.taught_class == "X RPL 1"
    assert stored.email == "ani@sekolah.sch.id"
    assert stored.teacher_identifier == "GURU2025"


def test_teacher_invalid_email_fails(service, auth_codes):
    auth_codes.issue("GURU2025", "admin")

    with pytest.raises(InvalidEmailError):
        service.register(_teacher(email="ani@sekolah"))


def test_auth_code_is_single_use(service, auth_codes, codes, accounts):
    auth_codes.issue("GURU2025", "admin")

    first_id = service.register(_teacher(), now=NOW)

    entry = codes.get("GURU2025")
    assert entry.used is True
    assert entry.used_by_account_id == first_id
    assert entry.used_at

    with pytest.raises(IdentifierNotRedeemableError):
        service.register(_teacher(username="pak_budi"))

    assert len(accounts.items) == 1


def test_unknown_auth_code_is_not_redeemable(service):
    with pytest.raises(IdentifierNotRedeemableError):
        service.register(_teacher("TIDAKADA"))


def test_short_auth_code_is_invalid(service, auth_codes):
    auth_codes.issue("GURU", "admin")

    with pytest.raises(InvalidTeacherIdentifierError):
        service.register(_teacher("GU"))


def test_failed_redemption_keeps_account_and_logs(accounts, caplog):
    codes = StuckCodes()
    auth_codes = AuthCodeService(codes)
    auth_codes.issue("GURU2025", "admin")
    service = RegistrationService(accounts, Sha256PasswordHasher(), AuthCodePolicy(auth_codes))

    with caplog.at_level(logging.ERROR):
        account_id = service.register(_teacher())

    assert accounts.get_by_id(account_id) is not None
    assert codes.get("GURU2025").used is False
    assert any("could not be marked used" in r.getMessage() for r in caplog.records)


def test_storage_error_while_redeeming_still_returns_id(accounts, caplog):
    codes = BrokenCodes()
    auth_codes = AuthCodeService(codes)
    auth_codes.issue("GURU2025", "admin")
    service = RegistrationService(accounts, Sha256PasswordHasher(), AuthCodePolicy(auth_codes))

    with caplog.at_level(logging.ERROR):
        account_id = service.register(_teacher())

    assert [a.id for a in accounts.items] == [account_id]
    assert any(r.exc_info and isinstance(r.exc_info[1], OSError) for r in caplog.records)


def test_nip_policy_accepts_eighteen_digits_and_rejects_duplicates():
    accounts = InMemoryAccounts(enforce_unique_identifier=True)
    service = RegistrationService(accounts, Sha256PasswordHasher(), EmployeeNumberPolicy(accounts))

    service.register(_teacher("123456789012345678"))

    with pytest.raises(DuplicateTeacherIdentifierError):
        service.register(_teacher("123456789012345678", username="pak_budi"))

    assert len(accounts.items) == 1


def test_nip_policy_rejects_short_number():
    accounts = InMemoryAccounts(enforce_unique_identifier=True)
    service = RegistrationService(accounts, Sha256PasswordHasher(), EmployeeNumberPolicy(accounts))

    with pytest.raises(InvalidTeacherIdentifierError):
        service.register(_teacher("12345"))


def test_from_form_accepts_signup_page_aliases():
    form = RegistrationInput.from_form(
        {
            "username": "ibu_ani",
            "password": "Rahasia1!",
            "fullName": "Ani",
            "role": "teacher",
            "email": "ani@sekolah.sch.id",
            "nip": "123456789012345678",
            "mapelMengajar": "Informatika",
            "kelasMengajar": "XI",
        }
    )

    assert form.teacher_identifier == "123456789012345678"
    assert form.subject == "Informatika"
    assert form.taught_class == "XI"
    assert form.student_id == ""
