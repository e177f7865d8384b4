"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

from datetime import datetime, timezone

from flask import Request
from werkzeug.exceptions import BadRequest

# Largest value a signed 32-bit INTEGER column accepts on every backend.
MAX_INT = 2**31 - 1


def parse_json_request(req: Request) -> dict:
    """Return the parsed JSON body or raise a 400 error."""

    if not req.is_json:
        raise BadRequest("Request content type must be application/json.")

    data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("Request JSON body is required.")

    if not isinstance(data, dict):
        raise BadRequest("Request JSON payload must be an object.")

    if not data:
        raise BadRequest("Request JSON body must not be empty.")

    return data


def get_text(payload: dict, key: str, *, strip: bool = True) -> str:
    """Return ``payload[key]`` as text, rejecting non-string values."""

    value = payload.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise BadRequest(f"{key} must be a string.")
    return value.strip() if strip else value


def get_non_negative_int(
    payload: dict,
    key: str,
    default: int = 0,
    *,
    maximum: int = MAX_INT,
) -> int:
    """Return ``payload[key]`` as an integer between 0 and ``maximum``.

    Numeric strings are accepted since form widgets usually submit text.
    Fractional numbers are rejected rather than truncated.
    """

    value = payload.get(key)
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise BadRequest(f"{key} must be a whole number.")
    if isinstance(value, float):
        if not value.is_integer():
            raise BadRequest(f"{key} must be a whole number.")
        value = int(value)
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise BadRequest(f"{key} must be a whole number.") from None
    if number < 0:
        raise BadRequest(f"{key} must not be negative.")
    if number > maximum:
        raise BadRequest(f"{key} must not exceed {maximum}.")
    return number


def get_optional_datetime(payload: dict, key: str) -> datetime | None:
    """Return ``payload[key]`` parsed from an ISO 8601 string, or None."""

    value = payload.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise BadRequest(f"{key} must be an ISO 8601 date string.")
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        raise BadRequest(f"{key} must be an ISO 8601 date string.") from None
    if parsed.tzinfo is not None:
        # Stored columns hold naive UTC.
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed
