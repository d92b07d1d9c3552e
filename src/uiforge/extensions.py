"""
Extension singletons and the per-app component registry.

``db``, ``migrate`` and ``login_manager`` are bound to an app by
``init_extensions``. Everything with external reach (completion client,
user store, OAuth) hangs off ``AppComponents`` so tests can replace it.
"""

import logging
from typing import Optional

from flask import Flask, current_app, jsonify
from flask_login import LoginManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

logger = logging.getLogger(__name__)

db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()

COMPONENTS_KEY = 'app_components'


class AppComponents:
    """Long-lived collaborators of one app instance."""

    def __init__(self):
        self.completion_client = None
        self.user_store = None
        self.generation_service = None
        self.oauth_service = None

    def register(self, app: Flask):
        app.extensions[COMPONENTS_KEY] = self

    def set_completion_client(self, client):
        """Set completion client; the generation service is rebuilt on next use."""
        self.completion_client = client
        self.generation_service = None

    def set_user_store(self, store):
        self.user_store = store

    def set_oauth_service(self, oauth_service):
        self.oauth_service = oauth_service


def get_components() -> Optional[AppComponents]:
    return current_app.extensions.get(COMPONENTS_KEY)


def get_user_store():
    """Get user store from app components."""
    components = get_components()
    return components.user_store if components else None


def get_oauth_service():
    """Get Google OAuth service from app components."""
    components = get_components()
    return components.oauth_service if components else None


def init_extensions(app: Flask) -> AppComponents:
    """Bind the extensions to ``app`` and attach a fresh component registry."""
    db.init_app(app)
    migrate.init_app(app, db)

    login_manager.init_app(app)

    @login_manager.user_loader
    def _load_session_user(user_id):
        """Load the session user by id for Flask-Login."""
        from .services.auth_service import deserialize_user
        store = get_user_store()
        if store is None:
            return None
        return deserialize_user(store, user_id)

    @login_manager.unauthorized_handler
    def _unauthorized():
        """API-only app: always answer JSON."""
        return jsonify({'error': 'Authentication required'}), 401

    components = AppComponents()
    components.register(app)

    logger.info("Extensions initialized")
    return components
