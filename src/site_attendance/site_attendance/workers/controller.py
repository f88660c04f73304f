from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import api_errors
from ..container import Container
from ..sync.controller import register_table


def register(app: Flask, container: Container) -> None:
    register_table(app, container.tables["workers"])

    @app.route("/api/workers/supervisor", methods=["GET"], endpoint="workers_supervisor_roster")
    @api_errors
    def supervisor_roster():
        return jsonify([w.to_dict() for w in container.worker_service.supervisor_roster()])

    @app.route("/api/workers/expiring", methods=["GET"], endpoint="workers_expiring_passes")
    @api_errors
    def expiring_passes():
        return jsonify([row.to_dict() for row in container.worker_service.expiring_passes()])
