from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import api_errors, json_body, json_error
from ..common.validators import as_bool, optional_int, require_non_empty
from ..container import Container
from ..sync.controller import register_table


def register(app: Flask, container: Container) -> None:
    register_table(app, container.tables["active_clockins"])
    register_table(app, container.tables["attendance"])

    @app.route("/api/clock-in", methods=["POST"], endpoint="clock_in")
    @api_errors
    def clock_in():
        data = json_body()
        entry = container.clock_service.clock_in(
            require_non_empty(data.get("workerId"), "Worker id"),
            data.get("projectId") or "",
            overnight=as_bool(data.get("isOvernight", False)),
        )
        return jsonify({"success": True, "clockIn": entry.to_dict()}), 201

    @app.route("/api/clock-out/draft", methods=["POST"], endpoint="clock_out_draft")
    @api_errors
    def clock_out_draft():
        data = json_body()
        draft = container.clock_service.start_clock_out(require_non_empty(data.get("workerId"), "Worker id"))
        return jsonify({"success": True, "draft": draft.to_dict() if draft else None})

    @app.route("/api/clock-out", methods=["POST"], endpoint="clock_out")
    @api_errors
    def clock_out():
        data = json_body()
        record = container.clock_service.clock_out(
            require_non_empty(data.get("workerId"), "Worker id"),
            overrides=data.get("overrides") or {},
            expected_version=optional_int(data.get("clockInVersion"), "Clock-in version"),
            expected_token=data.get("clockInToken") or None,
        )
        # Idle worker: nothing to finalize, not an error.
        return jsonify({"success": True, "record": record.to_dict() if record else None})

    @app.route("/api/attendance/<record_id>", methods=["DELETE"], endpoint="attendance_delete")
    @api_errors
    def attendance_delete(record_id: str):
        if not container.attendance_repo.delete(record_id):
            return json_error("Attendance record not found", 404)
        return jsonify({"success": True})
