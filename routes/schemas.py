"""Typed request records validated at the API boundary."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime

from werkzeug.exceptions import BadRequest

from models.user import ROLE_VOLUNTEER
from utils.request_validation import get_non_negative_int, get_optional_datetime, get_text

MAX_AGE = 150


@dataclass(frozen=True)
class LoginRequest:
    email: str
    password: str

    @classmethod
    def from_payload(cls, payload: dict) -> "LoginRequest":
        email = get_text(payload, "email")
        password = get_text(payload, "password", strip=False)
        if not email or not password:
            raise BadRequest("Email and password are required.")
        return cls(email=email, password=password)


@dataclass(frozen=True)
class SignupRequest:
    name: str
    email: str
    password: str
    role: str = ROLE_VOLUNTEER

    @classmethod
    def from_payload(cls, payload: dict) -> "SignupRequest":
        role = get_text(payload, "role").upper() or ROLE_VOLUNTEER
        return cls(
            name=get_text(payload, "name"),
            email=get_text(payload, "email"),
            password=get_text(payload, "password", strip=False),
            role=role,
        )


@dataclass(frozen=True)
class PatientRecord:
    """Editable patient fields; ``id`` is only honoured on creation."""

    id: str
    name: str
    card_number: str = ""
    age: int = 0
    phone_number: str = ""
    cnic: str = ""
    comments: str = ""
    last_visit_at: datetime | None = None

    @classmethod
    def from_payload(cls, payload: dict, *, patient_id: str | None = None) -> "PatientRecord":
        record_id = patient_id if patient_id is not None else get_text(payload, "id")
        name = get_text(payload, "name")
        if not record_id:
            raise BadRequest("Patient id is required.")
        if not name:
            raise BadRequest("Patient name is required.")
        return cls(
            id=record_id,
            name=name,
            card_number=get_text(payload, "card_number"),
            age=get_non_negative_int(payload, "age", maximum=MAX_AGE),
            phone_number=get_text(payload, "phone_number"),
            cnic=get_text(payload, "cnic"),
            comments=get_text(payload, "comments", strip=False),
            last_visit_at=get_optional_datetime(payload, "last_visit_at"),
        )

    def fields(self) -> dict:
        """Return the mutable columns as keyword arguments."""

        values = asdict(self)
        values.pop("id")
        return values
