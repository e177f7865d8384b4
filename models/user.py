"""User model definition."""

from werkzeug.security import check_password_hash, generate_password_hash

from utils.clock import utcnow

from . import db


ROLE_ADMIN = "ADMIN"
ROLE_VOLUNTEER = "VOLUNTEER"
ROLES = (ROLE_ADMIN, ROLE_VOLUNTEER)


class User(db.Model):
    """A clinic staff account."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(
        db.Enum(*ROLES, name="user_role"),
        nullable=False,
        default=ROLE_VOLUNTEER,
        server_default=db.text(f"'{ROLE_VOLUNTEER}'"),
    )
    is_verified = db.Column(
        db.Boolean,
        nullable=False,
        default=False,
        server_default=db.false(),
    )
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    sessions = db.relationship(
        "AuthSession",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def set_password(self, password: str) -> None:
        """Hash and store the password with a per-record salt."""

        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""

        return check_password_hash(self.password_hash, password)

    def mark_verified(self) -> None:
        self.is_verified = True

    def to_dict(self) -> dict:
        """Serialize the user without credential material."""

        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "verified": self.is_verified,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User {self.email}>"
