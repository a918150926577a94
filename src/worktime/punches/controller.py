from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.enums import PunchKind
from ..core.exceptions import ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/subjects/<subject_id>/status", methods=["GET"], endpoint="api_subject_status")
    def api_subject_status(subject_id: str):
        try:
            status = container.punch_service.status(subject_id)
            return jsonify({"success": True, "subject_id": subject_id, "status": status.value}), 200
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Failed to load status for subject %s", subject_id)
            return jsonify({"success": False, "message": "Lỗi hệ thống"}), 500

    @app.route("/api/subjects/<subject_id>/punches", methods=["POST"], endpoint="api_register_punch")
    def api_register_punch(subject_id: str):
        data = request.get_json(silent=True) or {}
        try:
            try:
                kind = PunchKind(str(data.get("kind", "")).strip())
            except ValueError:
                raise ValidationError("Loại chấm công không hợp lệ")

            event_id = container.punch_service.register(
                subject_id,
                kind,
                category=data.get("category"),
                location=data.get("location"),
            )
            return jsonify({"success": True, "id": event_id, "kind": kind.value}), 201
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Failed to register punch for subject %s", subject_id)
            return jsonify({"success": False, "message": "Lỗi hệ thống khi chấm công"}), 500
