from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.jurnal_guru.jurnal_guru.auth_codes.json_auth_code_repository import JsonAuthCodeRepository
from src.jurnal_guru.jurnal_guru.auth_codes.service import AuthCodeService
from src.jurnal_guru.jurnal_guru.core.enums import Role
from src.jurnal_guru.jurnal_guru.core.exceptions import (
    AuthorizationError,
    CodeAlreadyUsedError,
    CodeNotFoundError,
    DuplicateCodeError,
    InvalidTeacherIdentifierError,
)
from src.jurnal_guru.jurnal_guru.storage.json_store import JsonDocumentStore

NOW = datetime(2025, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def service(tmp_path):
    return AuthCodeService(JsonAuthCodeRepository(JsonDocumentStore(tmp_path / "data.json")))


def test_issue_then_redeem_once(service):
    entry = service.issue("GURU2025", "admin", now=NOW)

    assert entry.used is False
    assert entry.issued_at == "2025-01-01T00:00:00.000Z"
    assert service.is_redeemable("GURU2025") is True

    redeemed = service.redeem("GURU2025", "acc-1", now=NOW)

    assert redeemed.used is True
    assert redeemed.used_by_account_id == "acc-1"
    assert service.is_redeemable("GURU2025") is False
    with pytest.raises(CodeAlreadyUsedError):
        service.redeem("GURU2025", "acc-2")


def test_duplicate_code_is_rejected_even_after_use(service):
    service.issue("GURU2025", "admin")
    service.redeem("GURU2025", "acc-1")

    with pytest.raises(DuplicateCodeError):
        service.issue("GURU2025", "admin")


def test_redeem_unknown_code(service):
    with pytest.raises(CodeNotFoundError):
        service.redeem("TIDAKADA", "acc-1")


def test_short_code_is_rejected(service):
    with pytest.raises(InvalidTeacherIdentifierError):
        service.issue("abc", "admin")


def test_missing_code_is_generated(service):
    entry = service.issue(None, "admin")

    assert len(entry.code) == 8
    assert entry.code.isalnum() and entry.code.upper() == entry.code
    assert service.is_redeemable(entry.code)


def test_only_admin_may_issue(service):
    with pytest.raises(AuthorizationError):
        service.issue_as(current_role=Role.TEACHER, issued_by="riyan", code="GURU2025")

    assert service.issue_as(current_role=Role.ADMIN, issued_by="admin", code="GURU2025").issued_by == "admin"


def test_list_codes_filters_by_usage(service):
    service.issue("KODE0001", "admin")
    service.issue("KODE0002", "admin")
    service.redeem("KODE0001", "acc-1")

    assert [c.code for c in service.list_codes()] == ["KODE0001", "KODE0002"]
    assert [c.code for c in service.list_codes(used=True)] == ["KODE0001"]
    assert [c.code for c in service.list_codes(used=False)] == ["KODE0002"]


def test_numeric_code_is_taken_as_text(service):
    entry = service.issue(20252025, "admin")

    assert entry.code == "20252025"
    assert service.is_redeemable(20252025) is True
    assert service.redeem(20252025, "acc-1").used is True
