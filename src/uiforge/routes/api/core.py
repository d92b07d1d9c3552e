"""
Core API routes
===============

Health check.
"""

from datetime import datetime, timezone

from flask import Blueprint, jsonify

from .common import api_error, get_database_health

core_bp = Blueprint('core_api', __name__)


@core_bp.route('/health')
def api_health():
    """Liveness plus a trivial database round trip."""
    connected, problem = get_database_health()
    if not connected:
        return api_error(f"Database unavailable: {problem}", status=503)

    return jsonify({
        'success': True,
        'data': {
            'status': 'healthy',
            'database': 'connected',
            'timestamp': datetime.now(timezone.utc).isoformat(),
        },
    })
