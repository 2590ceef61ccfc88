from __future__ import annotations

from flask import jsonify, request

from ..core.enums import ErrorCode
from ..core.exceptions import DomainError, InfrastructureError, OutsideSchedule, ScheduleConflict

_STATUS = {
    ErrorCode.UNKNOWN_BADGE: 404,
    ErrorCode.ALREADY_ACTIVE: 409,
    ErrorCode.OUTSIDE_SCHEDULE: 403,
    ErrorCode.NO_ACTIVE_SESSION: 404,
    ErrorCode.SCHEDULE_CONFLICT: 409,
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.READER_UNAVAILABLE: 503,
    ErrorCode.REPOSITORY_ERROR: 503,
}


def domain_error(e: DomainError):
    """JSON body for a rejected request. The client should let the user scan/submit again."""

    body = {"success": False, "error": str(e), "code": e.code.value, "hint": "scan_again"}
    if isinstance(e, OutsideSchedule):
        body["windows"] = e.windows
    if isinstance(e, ScheduleConflict):
        body["conflict"] = e.conflicting.to_row()
    return jsonify(body), _STATUS.get(e.code, 400)


def infrastructure_error(e: InfrastructureError):
    """JSON body for a storage/device failure. Nothing was recorded; the client may retry."""

    body = {"success": False, "error": str(e), "code": e.code.value, "hint": "retry"}
    return jsonify(body), _STATUS.get(e.code, 503)


def bad_request(message: str):
    body = {"success": False, "error": message, "code": ErrorCode.VALIDATION_ERROR.value, "hint": "scan_again"}
    return jsonify(body), 400


def json_body() -> dict:
    """Request JSON as a dict; anything else (missing, malformed, array, scalar) reads as empty."""

    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
