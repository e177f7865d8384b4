"""Authentication blueprint providing signup, login and logout endpoints."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request

from auth.context import get_context, login_required
from auth.sessions import clear_session_cookie, set_session_cookie
from routes.schemas import LoginRequest, SignupRequest
from utils.request_validation import parse_json_request

auth_bp = Blueprint("auth", __name__)


def _cookie_options() -> dict:
    return {
        "cookie_name": current_app.config["AUTH_COOKIE_NAME"],
        "secure": current_app.config["AUTH_COOKIE_SECURE"],
    }


@auth_bp.route("/signup", methods=["POST"])
def signup() -> tuple:
    """Register an account that waits for admin verification."""

    form = SignupRequest.from_payload(parse_json_request(request))
    user = get_context().accounts.signup(form.name, form.email, form.password, form.role)

    return (
        jsonify(
            {
                "message": "Account created. Please wait for an admin to verify your account.",
                "user": user.to_dict(),
            }
        ),
        HTTPStatus.CREATED,
    )


@auth_bp.route("/login", methods=["POST"])
def login():
    """Authenticate a verified user and set the session cookie."""

    form = LoginRequest.from_payload(parse_json_request(request))
    user, auth_session = get_context().accounts.login(form.email, form.password)

    response = jsonify(
        {
            "user": user.to_dict(),
            "redirect": current_app.config["LANDING_PATH"],
        }
    )
    set_session_cookie(response, auth_session, **_cookie_options())
    return response


@auth_bp.route("/logout", methods=["POST"])
def logout():
    """End the current session; succeeds even without one."""

    ctx = get_context()
    ctx.accounts.logout(ctx.token)

    response = jsonify({"redirect": current_app.config["LOGIN_PATH"]})
    clear_session_cookie(response, **_cookie_options())
    return response


@auth_bp.route("/me", methods=["GET"])
@login_required
def me(ctx):
    """Return the account behind the session cookie."""

    return jsonify(
        {
            "user": ctx.user.to_dict(),
            "expires_at": ctx.auth_session.expires_at.isoformat(),
        }
    )
