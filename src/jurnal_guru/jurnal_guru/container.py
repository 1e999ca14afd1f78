from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .accounts.demo_accounts import DemoAccountDirectory
from .accounts.json_account_repository import JsonAccountRepository
from .accounts.mysql_account_repository import MySQLAccountRepository
from .accounts.repository import AccountRepository
from .accounts.service import AuthService, RegistrationService, SessionService
from .auth_codes.json_auth_code_repository import JsonAuthCodeRepository
from .auth_codes.mysql_auth_code_repository import MySQLAuthCodeRepository
from .auth_codes.repository import AuthCodeRepository
from .auth_codes.service import AuthCodeService
from .core.enums import IdentityPolicyKind
from .database.connection import DBConfig, DatabaseConnection
from .identity.base import TeacherIdentityPolicy
from .identity.factory import IdentityPolicyFactory
from .security.hashing import PasswordHasher, build_hasher
from .storage.json_store import JsonDocumentStore


@dataclass(frozen=True)
class Container:
    accounts_repo: AccountRepository
    auth_codes_repo: AuthCodeRepository

    hasher: PasswordHasher
    identity_policy: TeacherIdentityPolicy
    demo_accounts: Optional[DemoAccountDirectory]

    auth_code_service: AuthCodeService
    registration_service: RegistrationService
    auth_service: AuthService
    session_service: SessionService


def build_container(
    *,
    storage_backend: str = "json",
    data_file: str = "instance/jurnal_guru.json",
    db_config: Optional[Mapping[str, Any]] = None,
    identity_policy: str = IdentityPolicyKind.AUTH_CODE.value,
    password_hasher: str = "sha256",
    enable_demo_accounts: bool = True,
    demo_accounts: Optional[DemoAccountDirectory] = None,
) -> Container:
    kind = IdentityPolicyKind(identity_policy)
    unique_identifier = kind == IdentityPolicyKind.EMPLOYEE_NUMBER

    if storage_backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(dict(db_config or {})))
        accounts_repo: AccountRepository = MySQLAccountRepository(
            conn, enforce_unique_identifier=unique_identifier
        )
        auth_codes_repo: AuthCodeRepository = MySQLAuthCodeRepository(conn)
    elif storage_backend == "json":
        store = JsonDocumentStore(data_file)
        accounts_repo = JsonAccountRepository(store, enforce_unique_identifier=unique_identifier)
        auth_codes_repo = JsonAuthCodeRepository(store)
    else:
        raise ValueError(f"Unknown storage backend: {storage_backend!r}")

    hasher = build_hasher(password_hasher)
    auth_code_service = AuthCodeService(auth_codes_repo)
    policy = IdentityPolicyFactory().build(kind, accounts=accounts_repo, auth_codes=auth_code_service)

    demo = None
    if enable_demo_accounts:
        demo = demo_accounts or DemoAccountDirectory()

    auth_service = AuthService(accounts_repo, hasher)
    registration_service = RegistrationService(accounts_repo, hasher, policy)
    session_service = SessionService(auth_service, demo)

    return Container(
        accounts_repo=accounts_repo,
        auth_codes_repo=auth_codes_repo,
        hasher=hasher,
        identity_policy=policy,
        demo_accounts=demo,
        auth_code_service=auth_code_service,
        registration_service=registration_service,
        auth_service=auth_service,
        session_service=session_service,
    )


def build_container_from_settings(settings: Any) -> Container:
    """Wire a container from a config module (see `config/`)."""
    return build_container(
        storage_backend=str(getattr(settings, "STORAGE_BACKEND", "json")),
        data_file=str(getattr(settings, "DATA_FILE", "instance/jurnal_guru.json")),
        db_config=getattr(settings, "DB_CONFIG", None),
        identity_policy=str(getattr(settings, "TEACHER_IDENTITY_POLICY", IdentityPolicyKind.AUTH_CODE.value)),
        password_hasher=str(getattr(settings, "PASSWORD_HASHER", "sha256")),
        enable_demo_accounts=bool(getattr(settings, "ENABLE_DEMO_ACCOUNTS", False)),
    )
