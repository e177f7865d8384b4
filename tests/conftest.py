"""Shared pytest fixtures for the application tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import create_app  # noqa: E402
from config import Config  # noqa: E402
from models import db  # noqa: E402
from models.user import ROLE_ADMIN, ROLE_VOLUNTEER, User  # noqa: E402


class _BaseTestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    AUTH_COOKIE_SECURE = False


@pytest.fixture()
def app() -> Flask:
    """Create a Flask application instance for tests."""

    application = create_app(_BaseTestConfig)

    with application.app_context():
        db.create_all()

    yield application

    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a test client for the Flask app."""

    return app.test_client()


@pytest.fixture()
def db_session(app: Flask):
    """Yield the database session inside an application context."""

    with app.app_context():
        yield db.session


def create_user(
    name: str,
    email: str,
    password: str,
    role: str = ROLE_VOLUNTEER,
    *,
    verified: bool = False,
) -> User:
    """Persist a user; must run inside an application context."""

    user = User(name=name, email=email, role=role, is_verified=verified)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture()
def admin_client(app: Flask, client: FlaskClient) -> FlaskClient:
    """A client logged in as a verified administrator."""

    with app.app_context():
        create_user("Admin", "admin@x.com", "adminpass", ROLE_ADMIN, verified=True)

    response = client.post(
        "/api/auth/login", json={"email": "admin@x.com", "password": "adminpass"}
    )
    assert response.status_code == 200
    return client


@pytest.fixture()
def volunteer_client(app: Flask, client: FlaskClient) -> FlaskClient:
    """A client logged in as a verified volunteer."""

    with app.app_context():
        create_user("Vera", "vera@x.com", "verapass", verified=True)

    response = client.post(
        "/api/auth/login", json={"email": "vera@x.com", "password": "verapass"}
    )
    assert response.status_code == 200
    return client
