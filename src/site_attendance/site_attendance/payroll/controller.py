from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_utc
from ..common.http import api_errors
from ..common.validators import as_bool
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payroll/summary", methods=["GET"], endpoint="payroll_summary")
    @api_errors
    def payroll_summary():
        today = now_utc().date()
        try:
            month = int(request.args.get("month") or today.month)
            year = int(request.args.get("year") or today.year)
        except ValueError:
            raise ValidationError("Month and year must be numbers")

        rows = container.payroll_service.monthly_summary(
            month,
            year,
            include_excluded=as_bool(request.args.get("includeExcluded", False)),
        )
        return jsonify(
            {
                "month": month,
                "year": year,
                "rows": [r.to_dict() for r in rows],
                "totalPay": round(sum(r.total_pay for r in rows), 2),
            }
        )
