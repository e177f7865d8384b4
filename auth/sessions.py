"""Session token issuing, validation and revocation."""

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta
from typing import Callable

from flask import Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.session import AuthSession
from utils.clock import utcnow
from utils.errors import StorageError

logger = logging.getLogger(__name__)

DEFAULT_LIFETIME = timedelta(days=7)
TOKEN_BYTES = 32


def generate_token() -> str:
    """Return a URL-safe token carrying 256 bits of randomness."""

    return secrets.token_urlsafe(TOKEN_BYTES)


class SessionManager:
    """Mint, validate and revoke session rows in the given store.

    Expired sessions are removed lazily: ``validate_session`` deletes a stale
    row when it meets one, and nothing sweeps the table in the background.
    Rows of users who never come back therefore stay until they are looked up
    again or their user is rejected.
    """

    def __init__(
        self,
        store: Session,
        *,
        lifetime: timedelta = DEFAULT_LIFETIME,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self.lifetime = lifetime
        self.clock = clock

    def create_session(self, token: str, user_id: int) -> AuthSession:
        """Persist a new session for ``user_id`` expiring after the lifetime."""

        auth_session = AuthSession(
            token=token,
            user_id=user_id,
            expires_at=self.clock() + self.lifetime,
        )
        self.store.add(auth_session)
        try:
            self.store.commit()
        except SQLAlchemyError as exc:
            self.store.rollback()
            logger.error("Could not create session for user %s: %s", user_id, exc)
            raise StorageError() from exc
        return auth_session

    def validate_session(self, token: str | None) -> AuthSession | None:
        """Return the live session for ``token`` or ``None``."""

        if not token:
            return None

        auth_session = self.store.get(AuthSession, token)
        if auth_session is None:
            return None

        if auth_session.is_expired(self.clock()):
            self._discard_stale(auth_session)
            return None
        return auth_session

    def _discard_stale(self, auth_session: AuthSession) -> None:
        # Best effort: the caller already treats the token as invalid.
        try:
            self.store.delete(auth_session)
            self.store.commit()
        except SQLAlchemyError as exc:
            self.store.rollback()
            logger.warning(
                "Failed to delete expired session of user %s: %s",
                auth_session.user_id,
                exc,
            )

    def invalidate_session(self, token: str | None) -> None:
        """Delete the session row for ``token``; missing rows are fine."""

        if not token:
            return
        try:
            self.store.query(AuthSession).filter_by(token=token).delete(
                synchronize_session="fetch"
            )
            self.store.commit()
        except SQLAlchemyError as exc:
            self.store.rollback()
            logger.error("Could not invalidate session: %s", exc)
            raise StorageError() from exc

    def delete_user_sessions(self, user_id: int) -> int:
        """Delete every session owned by ``user_id`` without committing."""

        return (
            self.store.query(AuthSession)
            .filter_by(user_id=user_id)
            .delete(synchronize_session="fetch")
        )


def set_session_cookie(
    response: Response,
    auth_session: AuthSession,
    *,
    cookie_name: str,
    secure: bool,
) -> None:
    """Attach the session token cookie, expiring with the session row."""

    response.set_cookie(
        cookie_name,
        auth_session.token,
        expires=auth_session.expires_at,
        path="/",
        secure=secure,
        httponly=True,
        samesite="Lax",
    )


def clear_session_cookie(response: Response, *, cookie_name: str, secure: bool) -> None:
    response.delete_cookie(
        cookie_name,
        path="/",
        secure=secure,
        httponly=True,
        samesite="Lax",
    )
