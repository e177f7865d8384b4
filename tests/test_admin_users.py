"""Tests for the admin account review endpoints."""

from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from conftest import create_user
from models import db
from models.session import AuthSession
from models.user import User


def _pending_user(app, email: str = "alice@x.com") -> int:
    with app.app_context():
        return create_user("Alice", email, "secret1").id


def test_admin_lists_all_and_unverified_users(app, admin_client: FlaskClient):
    alice_id = _pending_user(app)

    everyone = admin_client.get("/api/users")
    pending = admin_client.get("/api/users/unverified")

    assert everyone.status_code == 200
    assert {user["email"] for user in everyone.get_json()} == {"admin@x.com", "alice@x.com"}
    assert [user["id"] for user in pending.get_json()] == [alice_id]
    assert all("password_hash" not in user for user in everyone.get_json())


def test_admin_verifies_user(app, admin_client: FlaskClient):
    alice_id = _pending_user(app)

    response = admin_client.post(f"/api/users/{alice_id}/verify")

    assert response.status_code == 200
    assert response.get_json()["verified"] is True
    with app.app_context():
        assert db.session.get(User, alice_id).is_verified is True


def test_admin_rejects_user_and_their_sessions_stop_working(app, admin_client: FlaskClient):
    with app.app_context():
        alice_id = create_user("Alice", "alice@x.com", "secret1", verified=True).id

    alice_client = app.test_client()
    login = alice_client.post(
        "/api/auth/login", json={"email": "alice@x.com", "password": "secret1"}
    )
    assert login.status_code == 200
    assert alice_client.get("/api/auth/me").status_code == 200

    response = admin_client.delete(f"/api/users/{alice_id}")

    assert response.status_code == 200
    assert response.get_json() == {"id": alice_id, "status": "rejected"}
    with app.app_context():
        assert db.session.get(User, alice_id) is None
        assert AuthSession.query.filter_by(user_id=alice_id).count() == 0
    assert alice_client.get("/api/auth/me").status_code == 401


def test_verify_and_reject_unknown_user_return_not_found(admin_client: FlaskClient):
    verify = admin_client.post("/api/users/999/verify")
    reject = admin_client.delete("/api/users/999")

    assert verify.status_code == 404
    assert reject.status_code == 404
    assert verify.get_json()["code"] == "NotFound"


def test_non_admin_is_forbidden_from_admin_procedures(app, volunteer_client: FlaskClient):
    alice_id = _pending_user(app)

    responses = [
        volunteer_client.get("/api/users"),
        volunteer_client.get("/api/users/unverified"),
        volunteer_client.post(f"/api/users/{alice_id}/verify"),
        volunteer_client.delete(f"/api/users/{alice_id}"),
    ]

    for response in responses:
        assert response.status_code == 403
        assert response.get_json()["code"] == "Forbidden"
    with app.app_context():
        alice = db.session.get(User, alice_id)
        assert alice is not None
        assert alice.is_verified is False


@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/api/users"),
        ("get", "/api/users/unverified"),
        ("post", "/api/users/1/verify"),
        ("delete", "/api/users/1"),
    ],
)
def test_admin_procedures_require_a_session(client: FlaskClient, method, path):
    response = getattr(client, method)(path)

    assert response.status_code == 401
    assert response.get_json()["code"] == "AuthenticationRequired"
