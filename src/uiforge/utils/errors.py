"""HTTP-facing errors and the JSON error envelope.

``AppError`` subclasses carry their own status. Service-layer exceptions stay
unaware of HTTP and are mapped here by class name.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional
from datetime import datetime, timezone
from flask import g, has_request_context, request

UNMAPPED_STATUS = 500


@dataclass(eq=False)
class AppError(Exception):
    message: str
    http_status: int = 400
    code: Optional[str] = None
    details: Optional[Dict[str, Any]] = None

    def __str__(self):
        return self.message


@dataclass(eq=False)
class ServiceUnavailableError(AppError):
    http_status: int = 503


# Service layer exceptions resolved by class name (walking the MRO) to avoid
# importing the service package from the HTTP layer.
SERVICE_EXCEPTION_HTTP_MAP = {
    'DuplicateEmailError': 409,
    'DuplicateUsernameError': 409,
    'AuthenticationError': 401,
    'NotFoundError': 404,
    'ValidationError': 400,
    'ConflictError': 409,
}


def build_error_payload(message: str, *, status: int, error: str | None = None, **extra: Any) -> Dict[str, Any]:
    payload = {
        'success': False,
        'status': 'error',
        'status_code': status,
        'message': message,
        'error': error or message,
        'error_id': getattr(g, 'request_id', None) if has_request_context() else None,
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'path': request.path if has_request_context() else None,
    }
    for key, value in extra.items():
        if value is not None:
            payload[key] = value
    return payload


def map_service_exception(exc: Exception) -> int:
    for klass in type(exc).__mro__:
        status = SERVICE_EXCEPTION_HTTP_MAP.get(klass.__name__)
        if status is not None:
            return status
    return UNMAPPED_STATUS


def is_service_exception(exc: Exception) -> bool:
    return any(klass.__name__ == 'ServiceError' for klass in type(exc).__mro__)
