"""
Create Page API routes
======================

Template-driven page scaffolding.
"""

from flask import Blueprint, jsonify

from ...constants import PAGE_TEMPLATES
from ...services.generation_service import get_generation_service
from .common import api_success, get_json_body

create_page_bp = Blueprint('create_page', __name__, url_prefix='/create-page')


@create_page_bp.route('/generate', methods=['POST'])
def generate_page():
    """Generate a page structure and its source files.

    POST /api/create-page/generate  {template, requirements, style}
    """
    data = get_json_body()
    service = get_generation_service()

    page = service.generate_page(data.get('template'), data.get('requirements'), data.get('style'))
    files = service.generate_page_files(page)

    return api_success(page=page, files=files)


@create_page_bp.route('/templates', methods=['GET'])
def list_templates():
    """The fixed template catalog; no model call involved."""
    return jsonify({'templates': [dict(t) for t in PAGE_TEMPLATES]})
