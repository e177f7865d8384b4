"""Login session model definition."""

from datetime import datetime

from utils.clock import utcnow

from . import db


class AuthSession(db.Model):
    """A bearer token issued at login and carried in the session cookie.

    The token is both the primary key and the credential, so it must come
    from a cryptographically secure generator.
    """

    __tablename__ = "sessions"

    token = db.Column(db.String(128), primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    expires_at = db.Column(db.DateTime, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    user = db.relationship("User", back_populates="sessions")

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or utcnow()) > self.expires_at

    def __repr__(self) -> str:
        return f"<AuthSession user_id={self.user_id} expires_at={self.expires_at}>"
