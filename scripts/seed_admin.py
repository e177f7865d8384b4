"""Seed a verified administrator account."""

from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from app import create_app
from models import db
from models.user import ROLE_ADMIN, User


def main() -> None:
    app = create_app()
    with app.app_context():
        email = app.config["ADMIN_EMAIL"]
        password = app.config["ADMIN_PASSWORD"]
        if not password:
            raise SystemExit("Set ADMIN_PASSWORD to seed the administrator account.")

        admin = User.query.filter_by(email=email).first()
        if admin is None:
            admin = User(name=app.config["ADMIN_NAME"], email=email)
            db.session.add(admin)
            action = "created"
        else:
            action = "updated"
        admin.role = ROLE_ADMIN
        admin.mark_verified()
        admin.set_password(password)
        db.session.commit()
        print(f"Admin user {action}: {email}")


if __name__ == "__main__":
    main()
