"""
Improve API routes
==================

Code review with suggested improvements and an optimized version.
"""

import logging

from flask import Blueprint, current_app, request

from ...services.generation_service import get_generation_service
from ...utils.validators import validate_upload
from .common import api_error, api_success, get_json_body

logger = logging.getLogger(__name__)

improve_bp = Blueprint('improve', __name__, url_prefix='/improve')


def _submitted_code():
    """Code from an uploaded ``codeFile`` if present, else the ``code`` field.

    Returns ``(code, error_response)``.
    """
    upload = request.files.get('codeFile')
    if upload is not None and upload.filename:
        result = validate_upload(upload, current_app.config['MAX_UPLOAD_BYTES'])
        if not result['valid']:
            return None, api_error(result['errors'][0], status=result['status'])
        data, _ = result['value']
        return data.decode('utf-8', errors='replace'), None

    code = request.form.get('code') if request.form else None
    if code is None:
        code = get_json_body().get('code')
    return code if isinstance(code, str) else None, None


@improve_bp.route('/analyze', methods=['POST'])
def analyze_code():
    """POST /api/improve/analyze  JSON {code} or multipart codeFile"""
    code, error = _submitted_code()
    if error is not None:
        return error
    if not code or not code.strip():
        return api_error("No code provided for analysis", status=400)

    result = get_generation_service().improve_code(code)
    return api_success(improvements=result['improvements'], optimizedCode=result['optimizedCode'])
