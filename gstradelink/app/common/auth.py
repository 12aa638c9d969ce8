"""Admin sessions.

Login stores ``admin_id`` in the Flask session and sets a signed auth cookie
named ``<prefix>-<project_ref>-auth-token``. ``admin_gate`` (run before every
request) only checks that such a cookie is present; ``admin_required``
verifies the token itself.
"""

from __future__ import annotations

from functools import wraps
from typing import Any, Callable, TypeVar

from flask import current_app, redirect, request, session, url_for
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from gstradelink.app.extensions import db
from gstradelink.app.models import AdminUser

F = TypeVar("F", bound=Callable[..., Any])

ADMIN_PREFIX = "/admin"
LOGIN_PATH = "/admin/login"
AUTH_COOKIE_SUFFIX = "-auth-token"


def auth_cookie_name() -> str:
    cfg = current_app.config
    return f"{cfg['AUTH_COOKIE_PREFIX']}-{cfg['PROJECT_REF']}{AUTH_COOKIE_SUFFIX}"


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(current_app.secret_key, salt="admin-auth-v1")


def issue_token(admin: AdminUser) -> str:
    return _serializer().dumps({"sub": admin.id, "email": admin.email})


def read_token(token: str) -> dict | None:
    try:
        data = _serializer().loads(token, max_age=current_app.config["AUTH_SESSION_MAX_AGE"])
    except SignatureExpired:
        current_app.logger.info("Expired admin token rejected")
        return None
    except BadSignature:
        current_app.logger.warning("Admin token with bad signature rejected")
        return None
    return data if isinstance(data, dict) else None


def start_session(response, admin: AdminUser):
    session["admin_id"] = admin.id
    response.set_cookie(
        auth_cookie_name(),
        issue_token(admin),
        max_age=current_app.config["AUTH_SESSION_MAX_AGE"],
        httponly=True,
        samesite="Lax",
        secure=request.is_secure,
    )
    return response


def end_session(response):
    session.pop("admin_id", None)
    response.delete_cookie(auth_cookie_name())
    return response


def has_auth_cookie(cookies) -> bool:
    """Presence check only: name pattern and a plausible value length."""
    prefix = current_app.config["AUTH_COOKIE_PREFIX"] + "-"
    min_length = current_app.config["AUTH_TOKEN_MIN_LENGTH"]
    return any(
        name.startswith(prefix) and name.endswith(AUTH_COOKIE_SUFFIX) and len(value or "") >= min_length
        for name, value in cookies.items()
    )


def is_protected_path(path: str) -> bool:
    if path != ADMIN_PREFIX and not path.startswith(ADMIN_PREFIX + "/"):
        return False
    return not path.startswith(LOGIN_PATH)


def admin_gate():
    if is_protected_path(request.path) and not has_auth_cookie(request.cookies):
        return redirect(url_for("auth.login", next=request.path))
    return None


def admin_headers(response):
    if request.path == ADMIN_PREFIX or request.path.startswith(ADMIN_PREFIX + "/"):
        response.headers["X-Robots-Tag"] = "noindex, nofollow, noarchive"
        response.headers["Cache-Control"] = "no-store, max-age=0"
    return response


def current_admin() -> AdminUser | None:
    admin_id = session.get("admin_id")
    token = request.cookies.get(auth_cookie_name())
    if not admin_id or not token:
        return None
    data = read_token(token)
    if not data or data.get("sub") != admin_id:
        return None
    return db.session.get(AdminUser, admin_id)


def admin_required(fn: F) -> F:
    @wraps(fn)
    def wrapper(*args, **kwargs):
        if current_admin() is None:
            return end_session(redirect(url_for("auth.login", next=request.path)))
        return fn(*args, **kwargs)

    return wrapper  # type: ignore
