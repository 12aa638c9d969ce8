from __future__ import annotations

from flask import Blueprint, current_app, flash, redirect, render_template, request, session, url_for
from werkzeug.security import check_password_hash

from gstradelink.app.models import AdminUser
from gstradelink.app.common.auth import ADMIN_PREFIX, end_session, start_session
from gstradelink.app.common.lockout import LockoutGuard, format_countdown

bp = Blueprint("auth", __name__)

INVALID_CREDENTIALS = "Incorrect email or password."
TOO_MANY_REQUESTS = "Too many requests. Please try again in {countdown}."


def _safe_next(target: str | None) -> str:
    # Only admin paths, never another host
    if target and (target == ADMIN_PREFIX or target.startswith(ADMIN_PREFIX + "/")) and "//" not in target:
        return target
    return url_for("admin.dashboard")


def authenticate(email: str, password: str) -> AdminUser | None:
    if not email or not password:
        return None
    admin = AdminUser.query.filter_by(email=email.strip().lower()).first()
    if not admin or not check_password_hash(admin.password_hash, password):
        return None
    return admin


@bp.get("/admin/login")
def login():
    guard = LockoutGuard(session)
    remaining = guard.seconds_remaining()
    state = guard.state()
    return render_template(
        "admin/login.html",
        next_path=request.args.get("next", ""),
        locked=remaining > 0,
        seconds_remaining=remaining,
        countdown=format_countdown(remaining),
        locked_until_ms=int(state.locked_until * 1000) if state.locked_until else None,
    )


@bp.post("/admin/login")
def login_post():
    guard = LockoutGuard(session)
    next_path = request.form.get("next") or request.args.get("next") or ""

    if guard.is_locked():
        flash(TOO_MANY_REQUESTS.format(countdown=format_countdown(guard.seconds_remaining())), "error")
        return redirect(url_for("auth.login", next=next_path or None))

    email = (request.form.get("email") or "").strip().lower()
    password = request.form.get("password") or ""

    admin = authenticate(email, password)
    if admin is None:
        state = guard.record_failure()
        current_app.logger.info("Failed admin login (%d attempts in this browser)", state.attempts)
        if state.locked:
            flash(TOO_MANY_REQUESTS.format(countdown=format_countdown(guard.seconds_remaining())), "error")
        else:
            flash(INVALID_CREDENTIALS, "error")
        return redirect(url_for("auth.login", next=next_path or None))

    guard.record_success()
    current_app.logger.info("Admin %s logged in", admin.email)
    return start_session(redirect(_safe_next(next_path)), admin)


@bp.post("/admin/logout")
def logout():
    return end_session(redirect(url_for("ui.home")))
