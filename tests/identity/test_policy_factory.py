import pytest

from src.jurnal_guru.jurnal_guru.auth_codes.service import AuthCodeService
from src.jurnal_guru.jurnal_guru.core.enums import IdentityPolicyKind
from src.jurnal_guru.jurnal_guru.identity.auth_code_policy import AuthCodePolicy
from src.jurnal_guru.jurnal_guru.identity.employee_number_policy import EmployeeNumberPolicy
from src.jurnal_guru.jurnal_guru.identity.factory import IdentityPolicyFactory


class NoCodes:
    def list_all(self):
        return []

    def get(self, code):
        return None


def test_factory_builds_auth_code_policy():
    policy = IdentityPolicyFactory().build("auth_code", accounts=object(), auth_codes=AuthCodeService(NoCodes()))

    assert isinstance(policy, AuthCodePolicy)
    assert policy.kind == IdentityPolicyKind.AUTH_CODE
    assert policy.requires_unique_identifier is False


def test_factory_builds_employee_number_policy():
    policy = IdentityPolicyFactory().build(IdentityPolicyKind.EMPLOYEE_NUMBER, accounts=object())

    assert isinstance(policy, EmployeeNumberPolicy)
    assert policy.requires_unique_identifier is True


def test_auth_code_policy_needs_code_service():
    with pytest.raises(ValueError):
        IdentityPolicyFactory().build("auth_code", accounts=object())


def test_unknown_policy_is_rejected():
    with pytest.raises(ValueError):
        IdentityPolicyFactory().build("ktp", accounts=object())
