from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import api_errors, json_body
from ..common.validators import require_non_empty
from ..container import Container
from ..sync.controller import register_table


def register(app: Flask, container: Container) -> None:
    register_table(app, container.tables["reminders"])

    @app.route("/api/reminders/due", methods=["GET"], endpoint="reminders_due")
    @api_errors
    def reminders_due():
        viewer_id = require_non_empty(request.args.get("viewerId"), "Viewer id")
        return jsonify([r.to_dict() for r in container.reminder_service.due_for(viewer_id)])

    @app.route("/api/reminders/<reminder_id>/dismiss", methods=["POST"], endpoint="reminders_dismiss")
    @api_errors
    def reminders_dismiss(reminder_id: str):
        data = json_body()
        reminder = container.reminder_service.dismiss(reminder_id, data.get("viewerId"))
        return jsonify({"success": True, "reminder": reminder.to_dict()})
