"""Typed HTTP errors returned by the JSON API.

Every error carries a stable ``kind`` which the application error handler
includes in the response payload next to the HTTP status name, so clients can
branch on the failure without parsing the human readable ``detail``.
"""

from __future__ import annotations

from werkzeug import exceptions


class InvalidCredentials(exceptions.Unauthorized):
    kind = "InvalidCredentials"
    description = "Invalid email or password."


class AuthenticationRequired(exceptions.Unauthorized):
    kind = "AuthenticationRequired"
    description = "Authentication required."


class PendingVerification(exceptions.Forbidden):
    kind = "PendingVerification"
    description = "Your account is pending verification by an admin."


class Forbidden(exceptions.Forbidden):
    kind = "Forbidden"
    description = "Admin privileges required."


class NotFound(exceptions.NotFound):
    kind = "NotFound"
    description = "Resource not found."


class DuplicateEmail(exceptions.Conflict):
    kind = "DuplicateEmail"
    description = "Email already in use."


class StorageError(exceptions.InternalServerError):
    """Persistence failure; the detail shown to users never includes internals."""

    kind = "StorageError"
    description = "An unexpected error occurred."
