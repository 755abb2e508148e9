from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.http import domain_error_response, json_body, json_error
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/classes", methods=["GET"], endpoint="classes_list")
    def classes_list():
        try:
            classes = container.class_service.list_classes()
            return jsonify([c.to_dict() for c in classes])
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Failed to list classes")
            return json_error("Failed to list classes", 500)

    @app.route("/api/classes/<int:class_id>", methods=["GET"], endpoint="classes_get")
    def classes_get(class_id: int):
        try:
            return jsonify(container.class_service.get_class(class_id).to_dict())
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Failed to load class %s", class_id)
            return json_error("Failed to load class", 500)

    @app.route("/api/classes", methods=["POST"], endpoint="classes_create")
    def classes_create():
        try:
            created = container.class_service.create_class(json_body())
            return jsonify(created.to_dict()), 201
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Failed to create class")
            return json_error("Failed to create class", 500)

    @app.route("/api/classes/<int:class_id>", methods=["PUT"], endpoint="classes_update")
    def classes_update(class_id: int):
        try:
            updated = container.class_service.update_class(class_id, json_body())
            return jsonify(updated.to_dict())
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Failed to update class %s", class_id)
            return json_error("Failed to update class", 500)

    @app.route("/api/classes/<int:class_id>", methods=["DELETE"], endpoint="classes_delete")
    def classes_delete(class_id: int):
        try:
            container.class_service.delete_class(class_id)
            return jsonify({"success": True, "message": "Class deleted successfully"})
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Failed to delete class %s", class_id)
            return json_error("Failed to delete class", 500)
