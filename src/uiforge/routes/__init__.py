"""
Routes Package
Registers the JSON API blueprints.
"""

from flask import Blueprint

from .api import analyze_bp, auth_bp, clone_ui_bp, core_bp, create_page_bp, improve_bp, user_bp

__all__ = ['register_blueprints']


def register_blueprints(app):
    """
    Register all application blueprints with the Flask app.

    Feature blueprints are nested under a single ``/api`` parent.

    Args:
        app: Flask application instance
    """
    api_bp = Blueprint('api', __name__, url_prefix='/api')
    for bp in (core_bp, clone_ui_bp, create_page_bp, improve_bp, analyze_bp, auth_bp, user_bp):
        api_bp.register_blueprint(bp)
    app.register_blueprint(api_bp)
