"""Request scoped authentication context."""

from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Callable

from flask import current_app, g, request
from sqlalchemy.orm import Session

from models import db
from models.session import AuthSession
from models.user import User
from utils.errors import AuthenticationRequired

from .accounts import AccountService
from .sessions import SessionManager


@dataclass
class RequestContext:
    """Everything a view needs to act on behalf of the caller."""

    store: Session
    sessions: SessionManager
    accounts: AccountService
    token: str | None = None
    auth_session: AuthSession | None = None

    @property
    def user(self) -> User | None:
        if self.auth_session is None:
            return None
        return self.auth_session.user

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def has_stale_cookie(self) -> bool:
        return self.token is not None and self.auth_session is None


def build_context(store: Session, token: str | None) -> RequestContext:
    """Resolve ``token`` against the store using the app's session policy."""

    config = current_app.config
    sessions = SessionManager(store, lifetime=config["SESSION_LIFETIME"])
    accounts = AccountService(
        store,
        sessions,
        min_password_length=config["MIN_PASSWORD_LENGTH"],
    )
    return RequestContext(
        store=store,
        sessions=sessions,
        accounts=accounts,
        token=token or None,
        auth_session=sessions.validate_session(token),
    )


def get_context() -> RequestContext:
    """Return the context of the current request, building it once."""

    ctx = g.get("auth_context")
    if ctx is None:
        token = request.cookies.get(current_app.config["AUTH_COOKIE_NAME"])
        ctx = build_context(db.session, token)
        g.auth_context = ctx
    return ctx


def login_required(view: Callable) -> Callable:
    """Run ``view`` with the caller's context, rejecting anonymous calls."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        ctx = get_context()
        if not ctx.is_authenticated:
            raise AuthenticationRequired()
        return view(ctx, *args, **kwargs)

    return wrapper
