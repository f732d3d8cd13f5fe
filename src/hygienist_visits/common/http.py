"""JSON response helpers, auth decorators and error handlers shared by controllers."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Optional

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError, ValidationError
from ..users.service import SessionUser

logger = logging.getLogger(__name__)


def ok(data: Any = None, status: int = 200):
    return jsonify({"success": True, "data": data}), status


def fail(code: str, message: str, status: int, details: Optional[dict] = None):
    error = {"code": code, "message": message}
    if details:
        error["details"] = details
    return jsonify({"success": False, "error": error}), status


def current_user() -> Optional[SessionUser]:
    return SessionUser.from_session(session)


def login_required(view):
    """Answer 401 without a session; otherwise pass the SessionUser as ``user``."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        user = current_user()
        if not user:
            return fail("UNAUTHORIZED", "Login required", 401)
        return view(*args, user=user, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        user = current_user()
        if not user:
            return fail("UNAUTHORIZED", "Login required", 401)
        if not user.is_admin:
            return fail("FORBIDDEN", "You do not have permission for this action", 403)
        return view(*args, user=user, **kwargs)

    return wrapper


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object", code="INVALID_INPUT")
    return data


def query_int(name: str) -> Optional[int]:
    raw = request.args.get(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be a number", code="INVALID_PARAMETERS")


def require_query(*names: str) -> None:
    missing = [n for n in names if not (request.args.get(n) or "").strip()]
    if missing:
        raise ValidationError(
            f"Missing query parameters: {', '.join(missing)}",
            code="MISSING_PARAMETERS",
        )


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if e.status_code >= 500:
            logger.error("%s: %s", e.code, e.message)
        return fail(e.code, e.message, e.status_code, e.details)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        code = (e.name or "HTTP_ERROR").upper().replace(" ", "_")
        return fail(code, e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.path)
        message = str(e) if app.config.get("DEBUG") else "Internal server error"
        return fail("INTERNAL_SERVER_ERROR", message, 500)
