from __future__ import annotations

import logging
from functools import wraps
from typing import Any

from flask import jsonify, request

from ..core.exceptions import ConflictError, ValidationError

logger = logging.getLogger(__name__)


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def json_body() -> dict:
    data: Any = request.get_json(silent=True)
    if data is None:
        raise ValidationError("Request body must be JSON")
    return data


def api_errors(view):
    """Map domain errors to plain-language JSON; never leak a traceback."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return json_error(str(e), 400)
        except ConflictError as e:
            return json_error(str(e), 409)
        except Exception:
            logger.exception("Unhandled error in %s", request.path)
            return json_error("Something went wrong on the server, please try again", 500)

    return wrapper
