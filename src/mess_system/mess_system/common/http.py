from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Any, Callable, Optional

from flask import Flask, g, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, DomainError, ValidationError

logger = logging.getLogger(__name__)


def ok(data: Any = None, *, status: int = 200, message: Optional[str] = None, **extra: Any):
    """Success envelope: {success, data, message?, stats?}."""
    body: dict = {"success": True, "data": data}
    if message:
        body["message"] = message
    body.update({k: v for k, v in extra.items() if v is not None})
    return jsonify(body), status


def fail(error: str, *, status: int, errors: Optional[list] = None):
    body: dict = {"success": False, "error": error}
    if errors:
        body["errors"] = errors
    return jsonify(body), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    if not header.startswith("Bearer "):
        return None
    return header[len("Bearer "):].strip() or None


def build_guards(identify: Callable[[Optional[str]], Any]):
    """Return (login_required, role_required) decorators bound to a token verifier.

    The verified identity is stored on ``flask.g.identity``.
    """

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.identity = identify(bearer_token())
            return view(*args, **kwargs)

        return wrapper

    def role_required(*roles: Role):
        allowed = {r.value for r in roles}

        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                identity = getattr(g, "identity", None)
                if identity is None:
                    raise AuthorizationError("User not authenticated")
                if identity.role.value not in allowed:
                    raise AuthorizationError(f"Access denied. Required role: {' or '.join(sorted(allowed))}")
                return view(*args, **kwargs)

            return wrapper

        return decorator

    return login_required, role_required


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        errors = getattr(e, "errors", None)
        return fail(e.message, status=e.status_code, errors=errors)

    @app.errorhandler(404)
    def handle_not_found(e):
        logger.warning("404 Not Found: %s %s", request.method, request.path)
        return fail("Route not found", status=404)

    @app.errorhandler(405)
    def handle_method_not_allowed(e):
        return fail("Method not allowed", status=405)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return fail(e.description or e.name, status=e.code or 500)
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        message = f"Internal server error: {e}" if app.config.get("DEBUG") else "Internal server error"
        return fail(message, status=500)


def register_request_logging(app: Flask) -> None:
    @app.before_request
    def _start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_response(response):
        started = getattr(g, "request_started", None)
        duration_ms = (time.perf_counter() - started) * 1000 if started else 0.0
        identity = getattr(g, "identity", None)
        user = identity.user_id if identity else "anonymous"
        level = logging.WARNING if response.status_code >= 400 else logging.INFO
        logger.log(
            level,
            "%s %s %s %.1fms user=%s",
            request.method,
            request.path,
            response.status_code,
            duration_ms,
            user,
        )
        return response
