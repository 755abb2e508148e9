from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.http import domain_error_response, json_body, json_error
from ..common.validators import optional_id
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/students", methods=["GET"], endpoint="students_list")
    def students_list():
        try:
            class_id = optional_id(request.args.get("classId"), "classId")
            students = container.student_service.list_students(class_id=class_id)
            return jsonify([s.to_dict() for s in students])
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Failed to list students")
            return json_error("Failed to list students", 500)

    @app.route("/api/students/<int:student_id>", methods=["GET"], endpoint="students_get")
    def students_get(student_id: int):
        try:
            return jsonify(container.student_service.get_student(student_id).to_dict())
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Failed to load student %s", student_id)
            return json_error("Failed to load student", 500)

    @app.route("/api/students", methods=["POST"], endpoint="students_create")
    def students_create():
        try:
            created = container.student_service.create_student(json_body())
            return jsonify(created.to_dict()), 201
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Failed to create student")
            return json_error("Failed to create student", 500)

    @app.route("/api/students/<int:student_id>", methods=["PUT"], endpoint="students_update")
    def students_update(student_id: int):
        try:
            updated = container.student_service.update_student(student_id, json_body())
            return jsonify(updated.to_dict())
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Failed to update student %s", student_id)
            return json_error("Failed to update student", 500)

    @app.route("/api/students/<int:student_id>", methods=["DELETE"], endpoint="students_delete")
    def students_delete(student_id: int):
        try:
            container.student_service.delete_student(student_id)
            return jsonify({"success": True, "message": "Student deleted successfully"})
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Failed to delete student %s", student_id)
            return json_error("Failed to delete student", 500)
