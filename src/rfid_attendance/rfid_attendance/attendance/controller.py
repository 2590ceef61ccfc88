from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.responses import bad_request, domain_error, infrastructure_error, json_body
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.exceptions import DomainError, InfrastructureError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/rfid/tap-in", methods=["POST"], endpoint="rfid_tap_in")
    def rfid_tap_in():
        data = json_body()
        badge_id = str(data.get("badgeId") or data.get("rfidId") or "").strip()
        classroom_id = str(data.get("classroomId") or "").strip()
        if not badge_id or not classroom_id:
            return bad_request("RFID ID and classroom ID required")

        try:
            result = container.tap_engine.tap_in(badge_id, classroom_id)
        except DomainError as e:
            return domain_error(e)
        except InfrastructureError as e:
            app.logger.error("tap-in failed badge=%s classroom=%s: %s", badge_id, classroom_id, e)
            return infrastructure_error(e)
        return jsonify(result.to_payload()), 200

    @app.route("/api/rfid/tap-out", methods=["POST"], endpoint="rfid_tap_out")
    def rfid_tap_out():
        data = json_body()
        badge_id = str(data.get("badgeId") or data.get("rfidId") or "").strip()
        if not badge_id:
            return bad_request("RFID ID required")

        try:
            result = container.tap_engine.tap_out(badge_id, classroom_id=data.get("classroomId") or None)
        except DomainError as e:
            return domain_error(e)
        except InfrastructureError as e:
            app.logger.error("tap-out failed badge=%s: %s", badge_id, e)
            return infrastructure_error(e)
        return jsonify(result.to_payload()), 200

    @app.route("/api/attendance/state", methods=["GET"], endpoint="attendance_state")
    def attendance_state():
        teacher_id = (request.args.get("teacherId") or "").strip()
        if not teacher_id:
            return bad_request("teacherId required")
        try:
            work_date = parse_iso_date(request.args["date"]) if request.args.get("date") else container.clock.now().date()
        except ValueError:
            return bad_request("date must be YYYY-MM-DD")

        try:
            state = container.tap_engine.session_state(teacher_id, work_date)
        except InfrastructureError as e:
            return infrastructure_error(e)
        return jsonify({"teacherId": teacher_id, "date": work_date.strftime("%Y-%m-%d"), "state": state.value}), 200

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    def attendance_history():
        teacher_id = (request.args.get("teacherId") or "").strip()
        if not teacher_id:
            return bad_request("teacherId required")
        limit = request.args.get("limit", default=DEFAULT_HISTORY_LIMIT, type=int)
        if limit is None or limit < 1:
            return bad_request("limit must be a positive integer")

        try:
            rows = container.attendance_repo.get_recent_for_teacher(teacher_id, limit)
        except InfrastructureError as e:
            return infrastructure_error(e)
        return jsonify({"records": [r.to_row() for r in rows]}), 200
