"""Authentication: sessions, account lifecycle and the page gate."""

from .accounts import AccountService
from .context import RequestContext, get_context, login_required
from .sessions import (
    SessionManager,
    clear_session_cookie,
    generate_token,
    set_session_cookie,
)

__all__ = [
    "AccountService",
    "RequestContext",
    "SessionManager",
    "clear_session_cookie",
    "generate_token",
    "get_context",
    "login_required",
    "set_session_cookie",
]
