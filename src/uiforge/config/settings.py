"""
Application Configuration
========================

Configuration settings for different environments. Values are read from
environment variables when the class body is evaluated; the factory loads
``.env`` before importing this module.
"""

import os
from pathlib import Path

from ..constants import BCRYPT_ROUNDS, DEFAULT_MODEL_NAME, MAX_UPLOAD_BYTES


def _env(name: str, *fallbacks: str, default=None):
    """First non-empty value among ``name`` and its fallback variable names."""
    for key in (name, *fallbacks):
        value = os.environ.get(key)
        if value:
            return value
    return default


def _env_bool(name: str, default: str = 'false') -> bool:
    return os.environ.get(name, default).lower() in ('true', '1', 'yes')


class Config:
    """Base configuration class."""

    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # Database settings
    BASE_DIR = Path(__file__).resolve().parent.parent.parent  # src/
    DATABASE_PATH = BASE_DIR / 'data' / 'uiforge.db'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or f'sqlite:///{DATABASE_PATH}'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Password hashing cost (bcrypt log rounds)
    BCRYPT_LOG_ROUNDS = BCRYPT_ROUNDS

    # Uploads
    MAX_CONTENT_LENGTH = int(os.environ.get('MAX_CONTENT_LENGTH', str(MAX_UPLOAD_BYTES + 1024 * 1024)))
    MAX_UPLOAD_BYTES = MAX_UPLOAD_BYTES

    # Session configuration
    SESSION_COOKIE_SECURE = _env_bool('SESSION_COOKIE_SECURE')
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = int(os.environ.get('SESSION_LIFETIME', '86400'))  # 24 hours

    # Azure AI inference (VITE_ names kept for existing .env files)
    AZURE_AI_ENDPOINT = _env('AZURE_AI_ENDPOINT', 'VITE_AZURE_AI_ENDPOINT')
    AZURE_AI_API_KEY = _env('AZURE_AI_API_KEY', 'VITE_AZURE_AI_API_KEY')
    AZURE_AI_MODEL_NAME = _env('AZURE_AI_MODEL_NAME', 'VITE_AZURE_AI_MODEL_NAME', default=DEFAULT_MODEL_NAME)
    AI_REQUEST_TIMEOUT = int(os.environ.get('AI_REQUEST_TIMEOUT', '120'))

    # Google OAuth
    GOOGLE_CLIENT_ID = os.environ.get('GOOGLE_CLIENT_ID')
    GOOGLE_CLIENT_SECRET = os.environ.get('GOOGLE_CLIENT_SECRET')
    GOOGLE_REDIRECT_URI = os.environ.get('GOOGLE_REDIRECT_URI')  # default: url_for the callback

    # Where the browser lands after the OAuth callback
    FRONTEND_URL = os.environ.get('FRONTEND_URL', '/')

    # Storage backend: 'database' or 'memory'
    USER_STORE = os.environ.get('USER_STORE', 'database')

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    DEBUG = True


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SECRET_KEY = 'test-secret-key'
    BCRYPT_LOG_ROUNDS = 4
    # Real AI credentials must never be picked up by the test suite
    AZURE_AI_ENDPOINT = None
    AZURE_AI_API_KEY = None


class ProductionConfig(Config):
    DEBUG = False
    SESSION_COOKIE_SECURE = _env_bool('SESSION_COOKIE_SECURE', 'true')


_CONFIGS = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig,
}


def get_config_class(config_name: str = 'default') -> type:
    """Resolve a config class by name, defaulting to development."""
    return _CONFIGS.get(config_name, DevelopmentConfig)
