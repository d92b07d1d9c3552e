"""
Main Application Entry Point
===========================

Runs the UI Forge API with the Flask development server.
"""

import os
import sys

from .factory import create_app
from .utils.logging_config import get_logger

logger = get_logger('main')


def main() -> int:
    """Main application entry point."""
    config_name = os.environ.get('FLASK_ENV', 'development')
    port = int(os.environ.get('PORT', 5000))
    host = os.environ.get('HOST', '127.0.0.1')

    logger.info(f"Starting UI Forge in {config_name} mode")
    logger.info(f"Server will run on {host}:{port}")

    app = create_app(config_name)
    app.run(host=host, port=port, debug=app.config.get('DEBUG', False))
    return 0


if __name__ == '__main__':
    sys.exit(main())
