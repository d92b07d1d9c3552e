"""
API Routes Package
==================

API routes organized by feature:
- core: health check
- clone_ui: screenshot analysis and code generation
- create_page: page scaffolding and template catalog
- improve: code review
- analyze: performance and design-pattern analysis
- auth: registration, login, logout, Google sign-in
- user: profile
"""

from .analyze import analyze_bp
from .auth import auth_bp
from .clone_ui import clone_ui_bp
from .core import core_bp
from .create_page import create_page_bp
from .improve import improve_bp
from .user import user_bp

__all__ = [
    'core_bp',
    'clone_ui_bp',
    'create_page_bp',
    'improve_bp',
    'analyze_bp',
    'auth_bp',
    'user_bp',
]
