from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import api_errors, json_body
from .table_adapter import TableReplaceAdapter


def register_table(app: Flask, adapter: TableReplaceAdapter) -> None:
    """Expose ``GET``/``POST /api/<table>`` for one full-table adapter."""

    @api_errors
    def list_table():
        return jsonify(adapter.list_dicts())

    @api_errors
    def replace_table():
        result = adapter.replace_all(json_body())
        return jsonify({"success": True, **result.to_dict()})

    app.add_url_rule(f"/api/{adapter.table}", endpoint=f"{adapter.table}_list", view_func=list_table, methods=["GET"])
    app.add_url_rule(
        f"/api/{adapter.table}", endpoint=f"{adapter.table}_replace", view_func=replace_table, methods=["POST"]
    )
