from __future__ import annotations

from typing import Any

from flask import jsonify, request

from ..core.exceptions import DomainError, DuplicateRecordError, NotFoundError, StorageError, ValidationError

_STATUS_BY_ERROR: tuple[tuple[type[DomainError], int], ...] = (
    (ValidationError, 400),
    (NotFoundError, 404),
    (DuplicateRecordError, 409),
    (StorageError, 500),
    (DomainError, 400),
)


def json_error(message: str, status: int, **extra: Any):
    body = {"success": False, "message": message}
    body.update(extra)
    return jsonify(body), status


def domain_error_response(exc: DomainError):
    status = next(code for error_type, code in _STATUS_BY_ERROR if isinstance(exc, error_type))
    return json_error(str(exc), status)


def json_body() -> dict:
    """Request body as a dict; anything else is a client error."""

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
