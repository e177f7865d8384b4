"""Admin blueprint for reviewing staff accounts."""

from __future__ import annotations

from flask import Blueprint, jsonify

from auth.context import login_required

users_bp = Blueprint("users", __name__)


@users_bp.route("", methods=["GET"])
@login_required
def list_users(ctx):
    """Return every account, newest first."""

    users = ctx.accounts.list_users(ctx.user)
    return jsonify([user.to_dict() for user in users])


@users_bp.route("/unverified", methods=["GET"])
@login_required
def list_unverified_users(ctx):
    """Return accounts still waiting for verification."""

    users = ctx.accounts.list_unverified(ctx.user)
    return jsonify([user.to_dict() for user in users])


@users_bp.route("/<int:user_id>/verify", methods=["POST"])
@login_required
def verify_user(ctx, user_id: int):
    user = ctx.accounts.verify(user_id, ctx.user)
    return jsonify(user.to_dict())


@users_bp.route("/<int:user_id>", methods=["DELETE"])
@login_required
def reject_user(ctx, user_id: int):
    """Reject an account: the user and its sessions are deleted for good."""

    ctx.accounts.reject(user_id, ctx.user)
    return jsonify({"id": user_id, "status": "rejected"})
