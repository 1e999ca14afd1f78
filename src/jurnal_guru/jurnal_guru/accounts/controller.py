from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..container import Container
from ..core.constants import VALID_SUBJECTS
from ..core.enums import IdentityPolicyKind, Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    DuplicateCodeError,
    ValidationError,
)
from .service import RegistrationInput

logger = logging.getLogger(__name__)

SESSION_KEY = "userSession"


def _error(exc: DomainError, status: int):
    return jsonify({"error": str(exc), "kind": exc.kind}), status


def _server_error(message: str):
    return jsonify({"error": message, "kind": "ServerError"}), 500


def _flag(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in {"1", "true", "yes", "on"}


def _payload() -> dict:
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def register(app: Flask, container: Container) -> None:
    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if SESSION_KEY not in session:
                return _error(AuthenticationError("Silakan login terlebih dahulu"), 401)
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if SESSION_KEY not in session:
                return _error(AuthenticationError("Silakan login terlebih dahulu"), 401)
            if session[SESSION_KEY].get("role") != Role.ADMIN.value:
                return _error(AuthorizationError("Anda tidak memiliki akses"), 403)
            return view(*args, **kwargs)

        return wrapper

    @app.route("/api/register", methods=["POST"], endpoint="register_account")
    def register_account():
        try:
            account_id = container.registration_service.register(RegistrationInput.from_form(_payload()))
        except ValidationError as e:
            return _error(e, 400)
        except Exception:
            logger.exception("Registration failed unexpectedly")
            return _server_error("Terjadi kesalahan sistem saat registrasi")
        return jsonify({"id": account_id}), 201

    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = _payload()
        try:
            user = container.session_service.login(data.get("username", ""), data.get("password", ""))
        except ValidationError as e:
            return _error(e, 400)
        except AuthenticationError as e:
            return _error(e, 401)
        except Exception:
            logger.exception("Login failed unexpectedly")
            return _server_error("Terjadi kesalahan sistem saat login")

        session.clear()
        session.permanent = _flag(data.get("remember"))
        session[SESSION_KEY] = user.to_dict()
        return jsonify(user.to_dict())

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"ok": True})

    @app.route("/api/me", endpoint="me")
    @login_required
    def me():
        return jsonify(session[SESSION_KEY])

    @app.route("/api/accounts/<account_id>", endpoint="account_detail")
    @login_required
    def account_detail(account_id: str):
        current = session[SESSION_KEY]
        if current.get("role") != Role.ADMIN.value and current.get("id") != account_id:
            return _error(AuthorizationError("Anda tidak memiliki akses"), 403)

        view = container.auth_service.get_account(account_id)
        if view is None:
            return _error(ValidationError("Akun tidak ditemukan"), 404)
        return jsonify(view.to_dict())

    @app.route("/api/subjects", endpoint="subjects")
    def subjects():
        return jsonify({"subjects": list(VALID_SUBJECTS)})

    if container.identity_policy.kind != IdentityPolicyKind.AUTH_CODE:
        return

    @app.route("/api/admin/auth-codes", methods=["GET"], endpoint="list_auth_codes")
    @admin_required
    def list_auth_codes():
        used_arg = request.args.get("used")
        used = None if used_arg is None else _flag(used_arg)
        codes = container.auth_code_service.list_codes(used=used)
        return jsonify({"codes": [c.to_record() for c in codes]})

    @app.route("/api/admin/auth-codes", methods=["POST"], endpoint="issue_auth_code")
    @admin_required
    def issue_auth_code():
        current = session[SESSION_KEY]
        try:
            entry = container.auth_code_service.issue_as(
                current_role=Role(current["role"]),
                issued_by=current["username"],
                code=_payload().get("code"),
            )
        except DuplicateCodeError as e:
            return _error(e, 409)
        except ValidationError as e:
            return _error(e, 400)
        except AuthorizationError as e:
            return _error(e, 403)
        return jsonify(entry.to_record()), 201
