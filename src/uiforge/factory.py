"""
App factory for the UI Forge API.

Each call builds an independent app: its own config, database binding and
component registry. Tests rely on that to get a clean app per test.
"""

import time
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, g, request

from .extensions import db, init_extensions
from .utils.logging_config import get_logger, setup_application_logging

logger = get_logger('factory')


def _load_env() -> None:
    """Load ``.env`` from the project root without overriding real env vars."""
    project_root = Path(__file__).resolve().parents[2]
    dotenv_file = project_root / '.env'
    if dotenv_file.is_file():
        load_dotenv(dotenv_file)
        logger.info(f"Environment overrides read from {dotenv_file}")


def create_app(config_name: str = 'default', config_overrides: Optional[dict] = None) -> Flask:
    """
    Build the API app.

    Args:
        config_name: 'development', 'testing' or 'production'; unknown names
            fall back to development
        config_overrides: values applied on top of the config class
    """
    _load_env()
    setup_application_logging()

    # Settings read the environment at import time, so import after .env
    from .config.settings import get_config_class

    app = Flask(__name__)
    app.config.from_object(get_config_class(config_name))
    if config_overrides:
        app.config.update(config_overrides)

    if app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite:///') and ':memory:' not in app.config['SQLALCHEMY_DATABASE_URI']:
        Path(app.config['SQLALCHEMY_DATABASE_URI'][len('sqlite:///'):]).parent.mkdir(parents=True, exist_ok=True)

    components = init_extensions(app)
    _init_components(app, components)

    with app.app_context():
        from . import models as _models  # noqa: F401  (register tables)
        db.create_all()
        logger.info(f"Tables ready on {app.config['SQLALCHEMY_DATABASE_URI'].split(':', 1)[0]}")

    from .routes import register_blueprints
    register_blueprints(app)

    @app.route('/health')
    def root_health():
        from .routes.api.core import api_health
        return api_health()

    from .errors import register_error_handlers
    register_error_handlers(app)

    _register_request_logging(app)

    logger.info(f"UI Forge app ready ({config_name})")
    return app


def _init_components(app: Flask, components) -> None:
    """Build the long-lived collaborators from config."""
    from .services.completion_client import create_completion_client
    from .services.oauth_service import create_oauth_service
    from .services.user_store import create_user_store

    components.set_completion_client(create_completion_client(app.config))
    components.set_user_store(create_user_store(app.config))
    components.set_oauth_service(create_oauth_service(app.config))


def _register_request_logging(app: Flask) -> None:
    """One INFO line per response: method, path, status and elapsed time."""

    @app.before_request
    def _start_clock():
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_request(response):
        started = g.get('request_started')
        elapsed = f" in {(time.perf_counter() - started) * 1000:.1f}ms" if started is not None else ""
        logger.info(f"{request.method} {request.path} -> {response.status_code}{elapsed}")
        return response
