"""Centralized JSON error handlers.

Every error leaves the app as JSON built by ``build_error_payload``: HTTP
exceptions keep their code, ``AppError`` carries its own status, service
layer exceptions are mapped by class, and anything else becomes a generic
500 with no internals exposed.
"""
from __future__ import annotations

import uuid

from flask import Flask, current_app, g, jsonify, make_response
from werkzeug.exceptions import HTTPException

from ..utils.errors import AppError, build_error_payload, is_service_exception, map_service_exception

GENERIC_500_MESSAGE = "Internal server error"

ERROR_TITLES = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    409: "Conflict",
    413: "Payload Too Large",
    415: "Unsupported Media Type",
    500: "Internal Server Error",
    503: "Service Unavailable",
}


def render_error(status_code: int, error: Exception | None = None):
    """Build the JSON error response for ``error``."""
    if isinstance(error, AppError):
        status_code = error.http_status or status_code
        payload = build_error_payload(
            error.message, status=status_code, code=error.code, details=error.details
        )
    elif error is not None and is_service_exception(error):
        status_code = map_service_exception(error)
        message = str(error) if status_code < 500 else GENERIC_500_MESSAGE
        payload = build_error_payload(message, status=status_code)
    elif isinstance(error, HTTPException):
        status_code = error.code or status_code
        title = ERROR_TITLES.get(status_code, "Error")
        if status_code == 500:
            payload = build_error_payload(GENERIC_500_MESSAGE, status=500)
        elif status_code == 413:
            payload = build_error_payload("File too large", status=413)
        else:
            payload = build_error_payload(error.description or title, status=status_code, error=title)
    else:
        status_code = 500
        payload = build_error_payload(GENERIC_500_MESSAGE, status=500)

    return make_response(jsonify(payload), status_code)


def register_error_handlers(app: Flask) -> Flask:
    """Register handlers & attach request id generation."""

    @app.before_request
    def _assign_request_id():  # pragma: no cover - simple
        g.request_id = uuid.uuid4().hex

    @app.errorhandler(AppError)
    def handle_app_error(exc: AppError):
        return render_error(exc.http_status, exc)

    @app.errorhandler(HTTPException)
    def handle_http_exception(exc: HTTPException):
        return render_error(exc.code or 500, exc)

    @app.errorhandler(Exception)
    def handle_uncaught_exception(exc: Exception):
        if is_service_exception(exc) and map_service_exception(exc) < 500:
            current_app.logger.info(f"{type(exc).__name__}: {exc}")
        else:
            current_app.logger.exception("Unhandled exception: %s", exc)
        return render_error(500, exc)

    return app
