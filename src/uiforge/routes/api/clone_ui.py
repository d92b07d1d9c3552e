"""
Clone UI API routes
===================

Screenshot upload -> component analysis -> generated React code.
"""

import logging

from flask import Blueprint, current_app, request

from ...services.generation_service import get_generation_service
from ...utils.validators import validate_upload
from .common import api_error, api_success

logger = logging.getLogger(__name__)

clone_ui_bp = Blueprint('clone_ui', __name__, url_prefix='/clone-ui')


@clone_ui_bp.route('/analyze', methods=['POST'])
def analyze_ui():
    """Analyze an uploaded UI image and generate matching code.

    POST /api/clone-ui/analyze (multipart, field ``image``)
    """
    upload = request.files.get('image')
    if upload is None or not upload.filename:
        return api_error("No image file provided", status=400)

    result = validate_upload(upload, current_app.config['MAX_UPLOAD_BYTES'])
    if not result['valid']:
        return api_error(result['errors'][0], status=result['status'])

    image_bytes, mime_type = result['value']
    logger.info(f"Analyzing uploaded UI image ({len(image_bytes)} bytes, {mime_type})")

    service = get_generation_service()
    analysis = service.analyze_image(image_bytes, mime_type)
    generated_code = service.generate_ui_code(analysis)

    return api_success(analysis=analysis, generatedCode=generated_code)
