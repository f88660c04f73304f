from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        if container.health_service is None:
            return jsonify({"status": "connected", "message": "No database configured"})
        return jsonify(container.health_service.check())
