"""Patients blueprint with search and CRUD keyed by the card identifier."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify, request
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from werkzeug.exceptions import Conflict

from auth.context import login_required
from models import db
from models.patient import Patient
from routes.schemas import PatientRecord
from scanner import normalize_scanned_code
from utils.errors import NotFound, StorageError
from utils.request_validation import parse_json_request

patients_bp = Blueprint("patients", __name__)


def _get_patient_or_404(store, patient_id: str) -> Patient:
    patient = store.get(Patient, normalize_scanned_code(patient_id))
    if patient is None:
        raise NotFound("Patient not found.")
    return patient


def _commit(store) -> None:
    try:
        store.commit()
    except SQLAlchemyError as exc:
        store.rollback()
        raise StorageError() from exc


@patients_bp.route("", methods=["GET"])
@login_required
def list_patients(ctx):
    """Return patients, newest first, optionally filtered by ``q``."""

    query = ctx.store.query(Patient)

    search_term = (request.args.get("q") or "").strip()
    if search_term:
        # Plain substring match: % and _ in the term are literal characters.
        needle = search_term.lower()
        query = query.filter(
            or_(
                *(
                    db.func.lower(getattr(Patient, field)).contains(needle, autoescape=True)
                    for field in Patient.SEARCHABLE_FIELDS
                )
            )
        )

    patients = query.order_by(Patient.created_at.desc()).all()
    return jsonify([patient.to_dict() for patient in patients])


@patients_bp.route("", methods=["POST"])
@login_required
def create_patient(ctx):
    payload = parse_json_request(request)
    if isinstance(payload.get("id"), str):
        payload["id"] = normalize_scanned_code(payload["id"])
    record = PatientRecord.from_payload(payload)

    if ctx.store.get(Patient, record.id) is not None:
        raise Conflict("A patient with that ID already exists.")

    patient = Patient(id=record.id, **record.fields())
    ctx.store.add(patient)
    try:
        ctx.store.commit()
    except IntegrityError as exc:
        ctx.store.rollback()
        raise Conflict("A patient with that ID already exists.") from exc
    except SQLAlchemyError as exc:
        ctx.store.rollback()
        raise StorageError() from exc

    return jsonify(patient.to_dict()), HTTPStatus.CREATED


# Scanned identifiers are opaque and may contain slashes.
@patients_bp.route("/<path:patient_id>", methods=["GET"])
@login_required
def get_patient(ctx, patient_id: str):
    return jsonify(_get_patient_or_404(ctx.store, patient_id).to_dict())


@patients_bp.route("/<path:patient_id>", methods=["PUT"])
@login_required
def update_patient(ctx, patient_id: str):
    """Replace the editable fields of a patient; the id never changes."""

    patient = _get_patient_or_404(ctx.store, patient_id)
    record = PatientRecord.from_payload(parse_json_request(request), patient_id=patient.id)

    for field, value in record.fields().items():
        setattr(patient, field, value)
    _commit(ctx.store)

    return jsonify(patient.to_dict())


@patients_bp.route("/<path:patient_id>", methods=["DELETE"])
@login_required
def delete_patient(ctx, patient_id: str):
    patient = _get_patient_or_404(ctx.store, patient_id)
    deleted_id = patient.id
    ctx.store.delete(patient)
    _commit(ctx.store)

    return jsonify({"id": deleted_id, "status": "deleted"})
