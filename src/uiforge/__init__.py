"""
UI Forge Application Package
============================

Flask backend for AI-assisted UI cloning, page scaffolding and code review.
Uses the factory pattern implemented in factory.py for application creation.
"""

from uiforge.factory import create_app

__all__ = ['create_app']
