"""Page level authorization gate.

The gate only decides between redirecting and letting a page render. It is a
navigation aid, not a security boundary: every ``/api`` procedure checks the
caller's session and role itself.
"""

from __future__ import annotations

from flask import Flask, Response, current_app, g, redirect, request

from .context import get_context
from .sessions import clear_session_cookie


def _matches(path: str, prefixes) -> bool:
    return any(path == prefix or path.startswith(prefix.rstrip("/") + "/") for prefix in prefixes)


def is_gated_path(path: str) -> bool:
    """Return False for static assets, the API and other exempt paths."""

    return not _matches(path, current_app.config["GATE_EXEMPT_PREFIXES"])


def is_public_path(path: str) -> bool:
    return _matches(path, current_app.config["PUBLIC_PATH_PREFIXES"])


def decide(has_session: bool, public: bool, *, login_path: str, landing_path: str) -> str | None:
    """Return the redirect target for a page request, or None to proceed."""

    if not has_session and not public:
        return login_path
    if has_session and public:
        return landing_path
    return None


def init_app(app: Flask) -> None:
    """Install the gate on ``app``; it runs before routing on every request."""

    @app.before_request
    def _authorization_gate():
        path = request.path
        if not is_gated_path(path):
            return None

        ctx = get_context()
        if ctx.has_stale_cookie:
            g.clear_auth_cookie = True

        target = decide(
            ctx.is_authenticated,
            is_public_path(path),
            login_path=current_app.config["LOGIN_PATH"],
            landing_path=current_app.config["LANDING_PATH"],
        )
        if target is None:
            return None

        return redirect(target)

    @app.after_request
    def _drop_stale_cookie(response: Response) -> Response:
        if g.pop("clear_auth_cookie", False):
            clear_session_cookie(
                response,
                cookie_name=current_app.config["AUTH_COOKIE_NAME"],
                secure=current_app.config["AUTH_COOKIE_SECURE"],
            )
        return response
