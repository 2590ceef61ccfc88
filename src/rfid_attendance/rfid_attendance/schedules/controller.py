from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import domain_error, infrastructure_error, json_body
from ..core.exceptions import DomainError, InfrastructureError
from ..container import Container

# JSON field -> ScheduleService keyword
_FIELDS = {
    "teacherId": "teacher_id",
    "classroomId": "classroom_id",
    "day": "day",
    "startTime": "start_time",
    "endTime": "end_time",
    "subject": "subject",
    "isActive": "is_active",
}


def register(app: Flask, container: Container) -> None:
    service = container.schedule_service

    def _fields(data: dict) -> dict:
        return {kw: data.get(key) for key, kw in _FIELDS.items() if key in data}

    @app.route("/api/schedules", methods=["GET"], endpoint="schedules_list")
    def schedules_list():
        try:
            entries = service.list_entries(
                classroom_id=request.args.get("classroomId") or None,
                day=request.args.get("day") or None,
                teacher_id=request.args.get("teacherId") or None,
            )
        except DomainError as e:
            return domain_error(e)
        except InfrastructureError as e:
            return infrastructure_error(e)
        return jsonify({"schedules": [e.to_row() for e in entries]}), 200

    @app.route("/api/schedules", methods=["POST"], endpoint="schedules_create")
    def schedules_create():
        fields = _fields(json_body())
        try:
            entry = service.create(
                teacher_id=fields.get("teacher_id"),
                classroom_id=fields.get("classroom_id"),
                day=fields.get("day"),
                start_time=fields.get("start_time"),
                end_time=fields.get("end_time"),
                subject=fields.get("subject"),
                is_active=fields.get("is_active", True),
            )
        except DomainError as e:
            return domain_error(e)
        except InfrastructureError as e:
            app.logger.error("schedule create failed: %s", e)
            return infrastructure_error(e)
        return jsonify({"success": True, "schedule": entry.to_row()}), 201

    @app.route("/api/schedules/<schedule_id>", methods=["PUT"], endpoint="schedules_update")
    def schedules_update(schedule_id: str):
        try:
            entry = service.update(schedule_id, **_fields(json_body()))
        except DomainError as e:
            return domain_error(e)
        except InfrastructureError as e:
            app.logger.error("schedule update failed id=%s: %s", schedule_id, e)
            return infrastructure_error(e)
        return jsonify({"success": True, "schedule": entry.to_row()}), 200

    @app.route("/api/schedules/<schedule_id>", methods=["DELETE"], endpoint="schedules_delete")
    def schedules_delete(schedule_id: str):
        try:
            service.deactivate(schedule_id)
        except DomainError as e:
            return domain_error(e)
        except InfrastructureError as e:
            return infrastructure_error(e)
        return jsonify({"success": True}), 200

    @app.route("/api/schedules/<schedule_id>/restore", methods=["POST"], endpoint="schedules_restore")
    def schedules_restore(schedule_id: str):
        try:
            entry = service.reactivate(schedule_id)
        except DomainError as e:
            return domain_error(e)
        except InfrastructureError as e:
            return infrastructure_error(e)
        return jsonify({"success": True, "schedule": entry.to_row()}), 200

    @app.route("/api/schedules/check", methods=["POST"], endpoint="schedules_check")
    def schedules_check():
        """Conflict analysis without writing anything."""

        data = json_body()
        try:
            candidate = service.build(
                schedule_id=str(data.get("id") or ""),
                teacher_id=data.get("teacherId"),
                classroom_id=data.get("classroomId"),
                day=data.get("day"),
                start_time=data.get("startTime"),
                end_time=data.get("endTime"),
                subject=data.get("subject") or "-",
            )
            conflicts = service.check(candidate)
        except DomainError as e:
            return domain_error(e)
        except InfrastructureError as e:
            return infrastructure_error(e)
        return jsonify({"conflict": bool(conflicts), "conflicts": [c.to_row() for c in conflicts]}), 200
