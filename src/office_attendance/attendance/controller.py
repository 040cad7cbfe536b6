from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import optional_location
from ..core.enums import ErrorKind
from ..core.exceptions import StoreError, ValidationError
from ..core.logging import get_logger
from ..container import Container
from .result import AttendanceResult

logger = get_logger(__name__)

_STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.VERIFICATION: 422,
    ErrorKind.TEMPORAL: 400,
    ErrorKind.CALENDAR: 400,
}


def _result_response(result: AttendanceResult, *, created: bool = False):
    if result.ok:
        data = result.session.to_dict()
        if result.verification is not None:
            data["verification"] = result.verification.to_dict()
        return jsonify({"success": True, "data": data}), 201 if created else 200

    body = {"success": False, "error": result.error.to_dict()}
    if result.verification is not None:
        body["verification"] = result.verification.to_dict()
    return jsonify(body), _STATUS_BY_KIND.get(result.error.kind, 400)


def _validation_response(exc: ValidationError):
    return jsonify({"success": False, "error": {"code": "ValidationError", "kind": "validation", "message": str(exc)}}), 400


def _store_response(exc: StoreError, message: str):
    return (
        jsonify(
            {
                "success": False,
                "error": {
                    "code": type(exc).__name__,
                    "kind": "store",
                    "message": message,
                    "retryable": exc.retryable,
                },
            }
        ),
        503,
    )


def _payload() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def register(app: Flask, container: Container) -> None:
    engine = container.attendance_engine

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="api_check_in")
    def api_check_in():
        try:
            data = _payload()
            result = engine.check_in(
                data.get("employee_id"),
                data.get("face_descriptor"),
                optional_location(data.get("latitude"), data.get("longitude")),
                face_score=data.get("face_match_score"),
            )
        except ValidationError as e:
            return _validation_response(e)
        except StoreError as e:
            logger.warning("Check-in store failure: %s", e)
            # Retrying check-in is safe: a committed first attempt comes back as DuplicateCheckIn.
            return _store_response(e, "Attendance store unavailable, please retry")
        return _result_response(result, created=True)

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="api_check_out")
    def api_check_out():
        try:
            data = _payload()
            result = engine.check_out(
                data.get("employee_id"),
                optional_location(data.get("latitude"), data.get("longitude")),
            )
        except ValidationError as e:
            return _validation_response(e)
        except StoreError as e:
            logger.warning("Check-out store failure: %s", e)
            return _store_response(e, "Attendance store unavailable; re-read the open session before retrying")
        return _result_response(result)

    @app.route("/api/attendance/today", methods=["GET"], endpoint="api_attendance_today")
    def api_attendance_today():
        try:
            sessions = engine.get_today_sessions(request.args.get("employee_id"))
        except ValidationError as e:
            return _validation_response(e)
        except StoreError as e:
            logger.warning("Today lookup store failure: %s", e)
            return _store_response(e, "Attendance store unavailable, please retry")
        return jsonify({"success": True, "data": [s.to_dict() for s in sessions]})

    @app.route("/api/attendance/open", methods=["GET"], endpoint="api_attendance_open")
    def api_attendance_open():
        try:
            session = engine.get_open_session(request.args.get("employee_id"))
        except ValidationError as e:
            return _validation_response(e)
        except StoreError as e:
            logger.warning("Open session lookup store failure: %s", e)
            return _store_response(e, "Attendance store unavailable, please retry")
        return jsonify({"success": True, "data": session.to_dict() if session else None})
