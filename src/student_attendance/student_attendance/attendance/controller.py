from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.http import domain_error_response, json_body, json_error
from ..core.exceptions import DomainError
from ..container import Container
from .commands import AttendanceFilter, AttendancePatch, BulkAttendanceCommand, CreateAttendanceCommand

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    def attendance_list():
        try:
            criteria = AttendanceFilter.from_query(request.args)
            views = container.attendance_service.get_attendance(criteria)
            return jsonify([v.to_dict() for v in views])
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Failed to list attendance")
            return json_error("Failed to list attendance records", 500)

    @app.route("/api/attendance/<int:attendance_id>", methods=["GET"], endpoint="attendance_get")
    def attendance_get(attendance_id: int):
        try:
            return jsonify(container.attendance_service.get_attendance_by_id(attendance_id).to_dict())
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Failed to load attendance %s", attendance_id)
            return json_error("Failed to load attendance record", 500)

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_create")
    def attendance_create():
        try:
            command = CreateAttendanceCommand.from_payload(json_body())
            view = container.attendance_service.create_attendance(command)
            return jsonify(view.to_dict()), 201
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Failed to create attendance")
            return json_error("Failed to create attendance record", 500)

    @app.route("/api/attendance/bulk", methods=["POST"], endpoint="attendance_bulk")
    def attendance_bulk():
        """Mark a whole class at once.

        201 when at least one entry was stored. When nothing was stored the
        body is the same but the status is 409 (every entry already existed)
        or 400 (anything else).
        """

        try:
            command = BulkAttendanceCommand.from_payload(json_body())
            result = container.attendance_service.mark_bulk_attendance(command)
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Failed to mark bulk attendance")
            return json_error("Failed to mark attendance", 500)

        if result.inserted:
            return jsonify({"success": True, **result.to_dict()}), 201

        status = 409 if result.all_duplicates else 400
        return json_error("No attendance records were inserted", status, **result.to_dict())

    @app.route("/api/attendance/<int:attendance_id>", methods=["PUT"], endpoint="attendance_update")
    def attendance_update(attendance_id: int):
        try:
            patch = AttendancePatch.from_payload(json_body())
            view = container.attendance_service.update_attendance(attendance_id, patch)
            return jsonify(view.to_dict())
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Failed to update attendance %s", attendance_id)
            return json_error("Failed to update attendance record", 500)

    @app.route("/api/attendance/<int:attendance_id>", methods=["DELETE"], endpoint="attendance_delete")
    def attendance_delete(attendance_id: int):
        try:
            container.attendance_service.delete_attendance(attendance_id)
            return jsonify({"success": True, "message": "Attendance record deleted successfully"})
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Failed to delete attendance %s", attendance_id)
            return json_error("Failed to delete attendance record", 500)

    @app.route("/api/attendance/report/<int:student_id>", methods=["GET"], endpoint="attendance_report")
    def attendance_report(student_id: int):
        try:
            report = container.attendance_service.get_student_report(student_id)
            return jsonify(report.to_dict())
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Failed to build report for student %s", student_id)
            return json_error("Failed to build attendance report", 500)
