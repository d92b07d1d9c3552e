"""
Common API utilities and response helpers
=========================================

Shared response builders and request helpers used across all API route
modules.
"""

from typing import Any, Dict, List, Optional

from flask import jsonify, request

from ...extensions import db
from ...utils.errors import build_error_payload


# ============================================================================
# RESPONSE HELPERS
# ============================================================================

def api_success(status: int = 200, **fields: Any):
    """JSON success response: ``{"success": true, **fields}``."""
    return jsonify({'success': True, **fields}), status


def api_error(message: str, status: int = 400, errors: Optional[List[str]] = None):
    """JSON error response; ``error`` carries the human readable message."""
    return jsonify(build_error_payload(message, status=status, errors=errors)), status


def validation_error(result: Dict[str, Any]):
    """Error response for a failed validator result."""
    errors = result.get('errors') or ['Invalid request']
    return api_error('; '.join(errors), status=result.get('status', 400), errors=errors)


# ============================================================================
# REQUEST HELPERS
# ============================================================================

def get_json_body() -> Dict[str, Any]:
    """Request JSON object, or an empty dict for a missing or non-object body."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


# ============================================================================
# SYSTEM STATUS HELPERS
# ============================================================================

def get_database_health():
    """Check database connection health."""
    try:
        db.session.execute(db.text('SELECT 1'))
        db.session.commit()
        return True, None
    except Exception as e:
        db.session.rollback()
        return False, str(e)
