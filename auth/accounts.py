"""Account lifecycle: signup, login, logout and admin review."""

from __future__ import annotations

import logging
from functools import lru_cache

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from werkzeug.exceptions import BadRequest
from werkzeug.security import check_password_hash, generate_password_hash

from models.session import AuthSession
from models.user import ROLE_ADMIN, ROLE_VOLUNTEER, ROLES, User
from utils.errors import (
    DuplicateEmail,
    Forbidden,
    InvalidCredentials,
    NotFound,
    PendingVerification,
    StorageError,
)

from .sessions import SessionManager, generate_token

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return generate_password_hash("dummy-password")


def _burn_password_check(password: str) -> None:
    """Spend the same hashing work as a real check for unknown emails."""

    check_password_hash(_dummy_hash(), password)


def _require_admin(actor: User | None) -> User:
    if actor is None or actor.role != ROLE_ADMIN:
        raise Forbidden()
    return actor


class AccountService:
    """Operations on staff accounts against an explicit store session."""

    def __init__(
        self,
        store: Session,
        sessions: SessionManager,
        *,
        min_password_length: int = 6,
    ):
        self.store = store
        self.sessions = sessions
        self.min_password_length = min_password_length

    def _find_by_email(self, email: str) -> User | None:
        return self.store.query(User).filter(User.email == email).first()

    def _get_user_or_404(self, user_id: int) -> User:
        user = self.store.get(User, user_id)
        if user is None:
            raise NotFound("User not found.")
        return user

    def signup(self, name: str, email: str, password: str, role: str = ROLE_VOLUNTEER) -> User:
        """Create an unverified account. No session is issued."""

        if not name or not email or not password:
            raise BadRequest("Name, email and password are required.")
        if role not in ROLES:
            raise BadRequest("Role must be one of: ADMIN, VOLUNTEER.")
        if len(password) < self.min_password_length:
            raise BadRequest(
                f"Password must be at least {self.min_password_length} characters."
            )

        if self._find_by_email(email) is not None:
            logger.info("Signup rejected, email already registered")
            raise DuplicateEmail()

        user = User(name=name, email=email, role=role, is_verified=False)
        user.set_password(password)
        self.store.add(user)
        try:
            self.store.commit()
        except IntegrityError as exc:
            # A concurrent signup won the race for the unique email.
            self.store.rollback()
            logger.info("Signup lost unique email race")
            raise DuplicateEmail() from exc
        except SQLAlchemyError as exc:
            self.store.rollback()
            logger.error("Signup failed to persist user: %s", exc)
            raise StorageError() from exc

        logger.info("User %s signed up with role %s", user.id, user.role)
        return user

    def login(self, email: str, password: str) -> tuple[User, AuthSession]:
        """Check credentials and issue a session for a verified user."""

        user = self._find_by_email(email) if email else None
        if user is None:
            _burn_password_check(password or "")
            logger.info("Login failed: invalid credentials")
            raise InvalidCredentials()

        if not user.check_password(password or ""):
            logger.info("Login failed for user %s: invalid credentials", user.id)
            raise InvalidCredentials()

        if not user.is_verified:
            logger.info("Login refused for user %s: pending verification", user.id)
            raise PendingVerification()

        auth_session = self.sessions.create_session(generate_token(), user.id)
        logger.info("User %s logged in", user.id)
        return user, auth_session

    def logout(self, token: str | None) -> None:
        """Invalidate ``token``; never raises for the caller."""

        try:
            self.sessions.invalidate_session(token)
        except StorageError:
            logger.warning("Logout could not delete the session row")

    def list_users(self, actor: User | None) -> list[User]:
        _require_admin(actor)
        return self.store.query(User).order_by(User.id.desc()).all()

    def list_unverified(self, actor: User | None) -> list[User]:
        _require_admin(actor)
        return (
            self.store.query(User)
            .filter(User.is_verified.is_(False))
            .order_by(User.id.desc())
            .all()
        )

    def verify(self, user_id: int, actor: User | None) -> User:
        """Approve an account. Verifying twice is a no-op."""

        reviewer = _require_admin(actor)
        user = self._get_user_or_404(user_id)
        if not user.is_verified:
            user.mark_verified()
            self._commit("verify user")
            logger.info("User %s verified by %s", user.id, reviewer.id)
        return user

    def reject(self, user_id: int, actor: User | None) -> None:
        """Delete an account together with all of its sessions."""

        reviewer_id = _require_admin(actor).id
        user = self._get_user_or_404(user_id)
        removed = self.sessions.delete_user_sessions(user.id)
        self.store.delete(user)
        self._commit("reject user")
        logger.info(
            "User %s rejected by %s, %d session(s) removed",
            user_id,
            reviewer_id,
            removed,
        )

    def _commit(self, action: str) -> None:
        try:
            self.store.commit()
        except SQLAlchemyError as exc:
            self.store.rollback()
            logger.error("Failed to %s: %s", action, exc)
            raise StorageError() from exc
