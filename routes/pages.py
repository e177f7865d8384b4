"""Server rendered page shells; data is loaded through the JSON API."""

from __future__ import annotations

from flask import Blueprint, current_app, redirect, render_template

from auth.context import get_context

pages_bp = Blueprint("pages", __name__)


@pages_bp.route("/", methods=["GET"])
def index():
    return redirect(current_app.config["LANDING_PATH"])


@pages_bp.route("/login", methods=["GET"])
@pages_bp.route("/signup", methods=["GET"])
def login_page():
    return render_template("login.html", min_password_length=current_app.config["MIN_PASSWORD_LENGTH"])


@pages_bp.route("/dashboard", methods=["GET"])
def dashboard():
    return render_template("dashboard.html", user=get_context().user)


@pages_bp.route("/dashboard/patients", methods=["GET"])
def patients_page():
    return render_template("patients.html", user=get_context().user)


@pages_bp.route("/dashboard/scan", methods=["GET"])
def scan_page():
    return render_template("scan.html", user=get_context().user)


@pages_bp.route("/admin/verify-users", methods=["GET"])
def verify_users_page():
    # The listing itself is fetched from /api/users, which enforces the role.
    return render_template("verify_users.html", user=get_context().user)
